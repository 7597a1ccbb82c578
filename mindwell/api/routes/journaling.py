"""
Journaling API Routes

Saves journal entries and attaches an AI insight to each one.

By default the insight is generated in a background task after the entry has
been saved and the response sent (status "pending"); clients re-read the list
a moment later to pick it up. With ``wait=true`` the whole workflow runs
inline and the response says whether the insight made it ("annotated") or
the save succeeded without one ("degraded").
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request, Response

from mindwell.api.dependencies import get_current_user, get_database, get_workflow
from mindwell.api.models import JournalCreateRequest, JournalSubmitResponse
from mindwell.core.config import settings
from mindwell.features.auth.service import AuthenticatedUser
from mindwell.features.database.client import DatabaseClient
from mindwell.features.database.models import JournalEntry
from mindwell.features.journaling.annotation import AnnotationWorkflow
from mindwell.shared.correlation import CorrelationContext
from mindwell.shared.errors import NotFoundError, get_correlation_id

router = APIRouter(tags=["Journaling"])
logger = logging.getLogger("MindWell.API.Journaling")


async def annotate_in_background(
    workflow: AnnotationWorkflow,
    owner_id: str,
    entry_id: str,
    content: str,
    correlation_id: Optional[str] = None,
) -> None:
    """Generate and store the insight after the response has gone out, under the request's correlation ID."""
    with CorrelationContext(correlation_id):
        report = await workflow.annotate(owner_id, entry_id, content)
        logger.info(
            "Background annotation finished: %s",
            report.outcome.value,
            extra={"entry_id": entry_id},
        )


@router.post("/journal", response_model=JournalSubmitResponse, status_code=202)
async def submit_journal_entry(
    body: JournalCreateRequest,
    request: Request,
    response: Response,
    background_tasks: BackgroundTasks,
    wait: bool = Query(default=False, description="Generate the AI insight before responding"),
    user: AuthenticatedUser = Depends(get_current_user),
    workflow: AnnotationWorkflow = Depends(get_workflow),
) -> JournalSubmitResponse:
    """Save a journal entry and generate its AI insight."""
    if wait:
        report = await workflow.submit_and_annotate(user.id, body.content)
        response.status_code = 201
        return JournalSubmitResponse(
            status="degraded" if report.degraded else "annotated",
            message=report.message,
            entry=report.entry,
            ai_insight=report.annotation.insight,
            entries=report.entries,
        )

    entry = workflow.submit_entry(user.id, body.content)
    background_tasks.add_task(
        annotate_in_background,
        workflow,
        user.id,
        entry.id,
        body.content,
        get_correlation_id(request),
    )
    return JournalSubmitResponse(
        status="pending",
        message="Journal entry saved. AI insight is being generated.",
        entry=entry,
    )


@router.get("/journal", response_model=List[JournalEntry])
async def list_journal_entries(
    limit: int = Query(default=settings.DEFAULT_LIST_LIMIT, ge=1, le=settings.MAX_LIST_LIMIT),
    user: AuthenticatedUser = Depends(get_current_user),
    db: DatabaseClient = Depends(get_database),
) -> List[JournalEntry]:
    """List the caller's journal entries, newest first."""
    return db.journals.list_recent(user.id, limit=limit)


@router.get("/journal/{entry_id}", response_model=JournalEntry)
async def get_journal_entry(
    entry_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DatabaseClient = Depends(get_database),
) -> JournalEntry:
    entry = db.journals.get(user.id, entry_id)
    if entry is None:
        raise NotFoundError("journal entry", entry_id)
    return entry


@router.delete("/journal/{entry_id}", status_code=204)
async def delete_journal_entry(
    entry_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DatabaseClient = Depends(get_database),
) -> Response:
    if not db.journals.delete(user.id, entry_id):
        raise NotFoundError("journal entry", entry_id)
    return Response(status_code=204)
