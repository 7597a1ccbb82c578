import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mindwell import __version__
from mindwell.api.dependencies import Services, build_services
from mindwell.api.endpoints import router
from mindwell.core.config import settings
from mindwell.core.tracing import instrument_app, setup_tracing, shutdown_tracing
from mindwell.shared.correlation import CorrelationMiddleware
from mindwell.shared.errors import register_exception_handlers
from mindwell.shared.logging_config import setup_logging

logger = logging.getLogger("MindWell.Main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_tracing(settings.SERVICE_NAME)
    if app.state.services is None:
        app.state.services = build_services()
    logger.info("MindWell service started")
    yield
    shutdown_tracing()
    logger.info("MindWell service stopped")


def create_app(services: Optional[Services] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        services: Pre-built collaborators. When omitted they are constructed
                  from settings at startup.
    """
    app = FastAPI(
        title="MindWell Service",
        description="Mood tracking and journaling with AI insights",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(CorrelationMiddleware)
    register_exception_handlers(app)
    instrument_app(app)

    app.include_router(router, prefix="/api/v1")

    @app.get("/")
    async def root():
        return {"message": "MindWell Service Running"}

    return app


setup_logging(service_name=settings.SERVICE_NAME)
app = create_app()
