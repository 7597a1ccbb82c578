"""
Journal Annotation Workflow

Saves a journal entry, asks the insight generator for a supportive comment,
and stores that comment on the same entry:

    1. insert entry (ai_insight absent)      required, failure is terminal
    2. generate insight from the content      best-effort
    3. set ai_insight on the entry by id      best-effort, write-once

Steps 2 and 3 never roll back step 1 and are never retried. A failed or
blank generation leaves the entry permanently without an annotation.
"""

import asyncio
import logging
from typing import List

from mindwell.core.logging_utils import describe_text
from mindwell.core.tracing import get_tracer, workflow_span
from mindwell.features.database.models import JournalEntry
from mindwell.features.database.repositories.journals import JournalsRepository
from mindwell.features.journaling.results import (
    AnnotationReport,
    InsertResult,
    OracleResult,
    SubmissionReport,
    UpdateResult,
)
from mindwell.services.llm import InsightGenerator
from mindwell.shared.errors import OracleError, StoreError, StoreWriteError, ValidationError

logger = logging.getLogger("MindWell.Journaling.Annotation")
tracer = get_tracer(__name__)


def validate_content(content: str) -> str:
    """Reject missing or blank journal text."""
    if content is None or not isinstance(content, str) or not content.strip():
        raise ValidationError("Journal content must not be empty.", field="content")
    return content


class AnnotationWorkflow:
    """Orchestrates insert → generate → annotate for journal entries."""

    def __init__(
        self,
        journals: JournalsRepository,
        generator: InsightGenerator,
        refresh_delay: float = 2.0,
        list_limit: int = 20,
    ):
        self.journals = journals
        self.generator = generator
        self.refresh_delay = refresh_delay
        self.list_limit = list_limit

    # =========================================================================
    # STEPS
    # =========================================================================

    def insert_entry(self, owner_id: str, content: str) -> InsertResult:
        """Step 1: store the entry with no annotation."""
        with workflow_span(tracer, "journal.insert"):
            try:
                entry = self.journals.create(owner_id, content)
            except StoreError as exc:
                return InsertResult.failure(exc.message, error_code=exc.code)
        return InsertResult.success(entry)

    async def generate_insight(self, content: str) -> OracleResult:
        """Step 2: ask the generator for insight text."""
        with workflow_span(tracer, "oracle.generate"):
            try:
                text = await self.generator.generate(content)
            except OracleError as exc:
                return OracleResult.failure(exc.message, reason=exc.reason)
            except Exception as exc:  # pylint: disable=broad-except
                logger.exception("Insight generator raised unexpectedly")
                return OracleResult.failure(str(exc))

        if not text or not text.strip():
            return OracleResult.failure("AI returned an empty insight.", reason="empty_result")
        return OracleResult.success(text.strip())

    def apply_insight(self, owner_id: str, entry_id: str, text: str) -> UpdateResult:
        """Step 3: write the insight onto the entry if it has none yet."""
        with workflow_span(tracer, "journal.annotate", entry_id=entry_id):
            try:
                entry = self.journals.set_annotation(owner_id, entry_id, text)
            except StoreError as exc:
                return UpdateResult.failure(exc.message)

        if entry is None:
            return UpdateResult.skipped("Entry is missing or already has an AI insight.")
        return UpdateResult.success(entry)

    # =========================================================================
    # ORCHESTRATION
    # =========================================================================

    def submit_entry(self, owner_id: str, content: str) -> JournalEntry:
        """
        Validate and store a new journal entry.

        Raises:
            ValidationError: content is empty or blank (no store call made)
            StoreWriteError: the insert failed; nothing else runs
        """
        validate_content(content)
        logger.info("Submitting journal entry %s", describe_text(content))

        inserted = self.insert_entry(owner_id, content)
        if not inserted.is_success:
            logger.error("Journal entry insert failed: %s", inserted.error)
            raise StoreWriteError(inserted.error or "Failed to save journal entry.", table="journal_entries")
        return inserted.entry

    async def annotate(self, owner_id: str, entry_id: str, content: str) -> AnnotationReport:
        """
        Generate and store the insight for an already-saved entry.

        Never raises: every failure is logged and reflected in the report.
        """
        oracle = await self.generate_insight(content)
        if not oracle.is_success:
            logger.warning(
                "Insight generation failed for entry %s: %s",
                entry_id,
                oracle.error,
                extra={"entry_id": entry_id, "reason": oracle.reason},
            )
            return AnnotationReport(entry_id=entry_id, oracle=oracle)

        update = self.apply_insight(owner_id, entry_id, oracle.text)
        report = AnnotationReport(entry_id=entry_id, oracle=oracle, update=update)

        if update.is_success:
            logger.info("Entry %s annotated", entry_id, extra={"entry_id": entry_id})
        else:
            logger.error(
                "Storing insight for entry %s did not apply: %s",
                entry_id,
                update.error,
                extra={"entry_id": entry_id, "update_status": update.status.value},
            )
        return report

    async def submit_and_annotate(self, owner_id: str, content: str) -> SubmissionReport:
        """
        Run the whole workflow inline and re-read the owner's entries.

        The re-read waits ``refresh_delay`` seconds after the update so the
        list reflects the annotation; a slow store can still return stale rows.
        """
        entry = self.submit_entry(owner_id, content)
        report = await self.annotate(owner_id, entry.id, content)

        if self.refresh_delay > 0:
            await asyncio.sleep(self.refresh_delay)

        try:
            entries = self.refresh(owner_id)
        except StoreError as exc:
            # Entry is already saved at this point
            logger.error("Refreshing journal entries failed: %s", exc.message)
            return SubmissionReport(entry=entry, annotation=report, refresh_error=exc.message)
        return SubmissionReport(entry=entry, annotation=report, entries=entries)

    def refresh(self, owner_id: str) -> List[JournalEntry]:
        """Re-read the owner's recent entries."""
        return self.journals.list_recent(owner_id, limit=self.list_limit)
