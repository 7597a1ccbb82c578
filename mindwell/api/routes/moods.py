"""
Mood API Routes

Record, list and delete categorical mood entries. Moods are never edited.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Response

from mindwell.api.dependencies import get_current_user, get_database
from mindwell.api.models import MoodCreateRequest
from mindwell.core.config import settings
from mindwell.features.auth.service import AuthenticatedUser
from mindwell.features.database.client import DatabaseClient
from mindwell.features.database.models import MoodEntry
from mindwell.shared.errors import NotFoundError

router = APIRouter(tags=["Moods"])
logger = logging.getLogger("MindWell.API.Moods")


@router.post("/moods", response_model=MoodEntry, status_code=201)
async def record_mood(
    body: MoodCreateRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DatabaseClient = Depends(get_database),
) -> MoodEntry:
    note = body.note.strip() if body.note and body.note.strip() else None
    return db.moods.create(user.id, body.mood, note)


@router.get("/moods", response_model=List[MoodEntry])
async def list_moods(
    limit: int = Query(default=settings.DEFAULT_LIST_LIMIT, ge=1, le=settings.MAX_LIST_LIMIT),
    user: AuthenticatedUser = Depends(get_current_user),
    db: DatabaseClient = Depends(get_database),
) -> List[MoodEntry]:
    """List the caller's mood history, newest first."""
    return db.moods.list_recent(user.id, limit=limit)


@router.delete("/moods/{entry_id}", status_code=204)
async def delete_mood(
    entry_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DatabaseClient = Depends(get_database),
) -> Response:
    if not db.moods.delete(user.id, entry_id):
        raise NotFoundError("mood entry", entry_id)
    return Response(status_code=204)
