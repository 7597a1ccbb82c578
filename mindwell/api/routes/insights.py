"""
Insight API Route

Same-origin endpoint the front-end calls with a saved entry's id and text.
Generates the insight from the stored entry text and stores it on the entry
before responding.
"""

import logging

from fastapi import APIRouter, Depends

from mindwell.api.dependencies import get_current_user, get_database, get_workflow
from mindwell.api.models import InsightRequest, InsightResponse
from mindwell.features.auth.service import AuthenticatedUser
from mindwell.features.database.client import DatabaseClient
from mindwell.features.journaling.annotation import AnnotationWorkflow
from mindwell.features.journaling.results import AnnotationOutcome
from mindwell.shared.errors import NotFoundError, OracleError, StoreWriteError, ValidationError

router = APIRouter(tags=["Insights"])
logger = logging.getLogger("MindWell.API.Insights")


@router.post("/generate-insight", response_model=InsightResponse)
async def generate_insight(
    body: InsightRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DatabaseClient = Depends(get_database),
    workflow: AnnotationWorkflow = Depends(get_workflow),
) -> InsightResponse:
    """Generate and store the AI insight for one journal entry."""
    if not body.id.strip():
        raise ValidationError("Missing or invalid journal entry ID or content.", field="id")
    if not body.content.strip():
        raise ValidationError("Missing or invalid journal entry ID or content.", field="content")

    entry = db.journals.get(user.id, body.id)
    if entry is None:
        raise NotFoundError("journal entry", body.id)

    if entry.is_annotated:
        logger.info("Entry %s already annotated, skipping generation", body.id)
        return InsightResponse(
            message="Journal entry already has an AI insight.",
            ai_insight=entry.ai_insight,
        )

    # Generate from the stored text, not the text the client sent
    report = await workflow.annotate(user.id, body.id, entry.content)
    outcome = report.outcome

    if outcome == AnnotationOutcome.ORACLE_FAILED:
        raise OracleError(report.oracle.error or "AI insight generation failed.", reason=report.oracle.reason)
    if outcome == AnnotationOutcome.UPDATE_FAILED:
        raise StoreWriteError("Failed to update journal with AI insight.", table="journal_entries")
    if outcome == AnnotationOutcome.NOT_APPLIED:
        # Lost a race with another annotation of the same entry
        current = db.journals.get(user.id, body.id)
        if current is None:
            raise NotFoundError("journal entry", body.id)
        return InsightResponse(
            message="Journal entry already has an AI insight.",
            ai_insight=current.ai_insight,
        )

    return InsightResponse(
        message="AI insight generated and updated successfully!",
        ai_insight=report.insight,
    )
