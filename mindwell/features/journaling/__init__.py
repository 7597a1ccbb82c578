"""
Journaling Feature - Save journal entries and attach AI insights.
"""

from mindwell.features.journaling.annotation import AnnotationWorkflow, validate_content
from mindwell.features.journaling.results import (
    AnnotationOutcome,
    AnnotationReport,
    InsertResult,
    OracleResult,
    StepStatus,
    SubmissionReport,
    UpdateResult,
)

__all__ = [
    "AnnotationWorkflow",
    "validate_content",
    "AnnotationOutcome",
    "AnnotationReport",
    "InsertResult",
    "OracleResult",
    "StepStatus",
    "SubmissionReport",
    "UpdateResult",
]
