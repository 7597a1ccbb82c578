from fastapi import APIRouter

from mindwell.api.routes import auth, health, insights, journaling, moods


router = APIRouter()

router.include_router(auth.router)
router.include_router(moods.router)
router.include_router(journaling.router)
router.include_router(insights.router)
router.include_router(health.router)
