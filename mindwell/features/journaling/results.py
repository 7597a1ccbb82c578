"""
Result types for the three steps of the journal annotation workflow.

Each step reports success or failure explicitly instead of raising, so the
workflow can decide which failures are terminal (the insert) and which only
degrade the outcome (insight generation, the annotation update).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from mindwell.features.database.models import JournalEntry
from mindwell.shared.errors import ErrorCode


class StepStatus(Enum):
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


class AnnotationOutcome(Enum):
    """How steps 2 and 3 ended for one entry."""
    ANNOTATED = "annotated"
    ORACLE_FAILED = "oracle_failed"
    UPDATE_FAILED = "update_failed"
    NOT_APPLIED = "not_applied"


@dataclass
class InsertResult:
    status: StepStatus
    entry: Optional[JournalEntry] = None
    error_code: Optional[ErrorCode] = None
    error: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status == StepStatus.SUCCESS

    @classmethod
    def success(cls, entry: JournalEntry) -> "InsertResult":
        return cls(status=StepStatus.SUCCESS, entry=entry)

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode = ErrorCode.DATABASE_ERROR) -> "InsertResult":
        return cls(status=StepStatus.FAILED, error_code=error_code, error=error)


@dataclass
class OracleResult:
    status: StepStatus
    text: Optional[str] = None
    reason: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status == StepStatus.SUCCESS

    @classmethod
    def success(cls, text: str) -> "OracleResult":
        return cls(status=StepStatus.SUCCESS, text=text)

    @classmethod
    def failure(cls, error: str, reason: str = "provider_error") -> "OracleResult":
        return cls(status=StepStatus.FAILED, reason=reason, error=error)


@dataclass
class UpdateResult:
    status: StepStatus
    entry: Optional[JournalEntry] = None
    error: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status == StepStatus.SUCCESS

    @classmethod
    def success(cls, entry: JournalEntry) -> "UpdateResult":
        return cls(status=StepStatus.SUCCESS, entry=entry)

    @classmethod
    def failure(cls, error: str) -> "UpdateResult":
        return cls(status=StepStatus.FAILED, error=error)

    @classmethod
    def skipped(cls, error: str) -> "UpdateResult":
        """No row matched: the entry is gone or already carries an annotation."""
        return cls(status=StepStatus.SKIPPED, error=error)


@dataclass
class AnnotationReport:
    """Outcome of generating and storing the insight for one entry."""
    entry_id: str
    oracle: OracleResult
    update: Optional[UpdateResult] = None

    @property
    def outcome(self) -> AnnotationOutcome:
        if not self.oracle.is_success:
            return AnnotationOutcome.ORACLE_FAILED
        if self.update is None or self.update.status == StepStatus.FAILED:
            return AnnotationOutcome.UPDATE_FAILED
        if self.update.status == StepStatus.SKIPPED:
            return AnnotationOutcome.NOT_APPLIED
        return AnnotationOutcome.ANNOTATED

    @property
    def insight(self) -> Optional[str]:
        if self.outcome == AnnotationOutcome.ANNOTATED:
            return self.oracle.text
        return None

    @property
    def message(self) -> str:
        outcome = self.outcome
        if outcome == AnnotationOutcome.ANNOTATED:
            return "Journal entry saved and AI insight generated."
        if outcome == AnnotationOutcome.ORACLE_FAILED:
            return "Journal entry saved, but AI insight generation failed."
        if outcome == AnnotationOutcome.UPDATE_FAILED:
            return "Journal entry saved, but the AI insight could not be stored."
        return "Journal entry saved; the AI insight was not applied."


@dataclass
class SubmissionReport:
    """Everything a caller sees after submitting and waiting for annotation."""
    entry: JournalEntry
    annotation: AnnotationReport
    entries: List[JournalEntry] = field(default_factory=list)
    refresh_error: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.annotation.outcome != AnnotationOutcome.ANNOTATED

    @property
    def message(self) -> str:
        if self.refresh_error:
            return f"{self.annotation.message} Reloading entries failed: {self.refresh_error}"
        return self.annotation.message
