"""
Error taxonomy and standardized error responses for the MindWell service.

Every failure the service reports is a MindWellError subclass carrying an
ErrorCode and an HTTP status. Handlers registered on the app render them in
one envelope, with the request's correlation ID:

    {"error": {"code": "VALIDATION_ERROR", "message": "...",
               "details": {...}, "correlation_id": "ab12cd34"}}

Usage:
    from mindwell.shared.errors import ValidationError, StoreWriteError

    if not content.strip():
        raise ValidationError("Journal content must not be empty", field="content")
"""

import logging
from enum import Enum
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from mindwell.core.logging_utils import sanitize_for_logging

logger = logging.getLogger("MindWell.Errors")


class ErrorCode(str, Enum):
    """Standard error codes used across the service."""

    # Client errors (4xx)
    PARSE_ERROR = "PARSE_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"

    # Server errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class ErrorDetail(BaseModel):
    """Structured error detail model."""
    code: str
    message: str
    details: Optional[dict[str, Any]] = None
    correlation_id: Optional[str] = None


class ErrorResponse(BaseModel):
    """Standard error response wrapper."""
    error: ErrorDetail


# =============================================================================
# EXCEPTIONS
# =============================================================================

class MindWellError(Exception):
    """Base class for every error the service reports to callers."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ParseError(MindWellError):
    """The request body could not be parsed."""

    code = ErrorCode.PARSE_ERROR
    status_code = 400


class ValidationError(MindWellError):
    """A required field is missing, empty or out of range."""

    code = ErrorCode.VALIDATION_ERROR
    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, details={"field": field} if field else None)
        self.field = field


class AuthenticationError(MindWellError):
    code = ErrorCode.UNAUTHORIZED
    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class NotFoundError(MindWellError):
    code = ErrorCode.NOT_FOUND
    status_code = 404

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} {resource_id} not found",
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class StoreError(MindWellError):
    """A collection operation against the data store failed."""

    code = ErrorCode.DATABASE_ERROR
    status_code = 500
    operation = "query"

    def __init__(self, message: str, table: Optional[str] = None):
        details = {"operation": self.operation}
        if table:
            details["table"] = table
        super().__init__(message, details=details)
        self.table = table


class StoreReadError(StoreError):
    operation = "read"


class StoreWriteError(StoreError):
    operation = "write"


class OracleError(MindWellError):
    """Insight generation failed or produced no usable text."""

    code = ErrorCode.EXTERNAL_SERVICE_ERROR
    status_code = 502

    def __init__(self, message: str, reason: str = "provider_error"):
        super().__init__(message, details={"service": "insight-generator", "reason": reason})
        self.reason = reason


class AuthProviderError(MindWellError):
    """The external auth provider rejected or failed a request."""

    code = ErrorCode.EXTERNAL_SERVICE_ERROR
    status_code = 502

    def __init__(self, message: str):
        super().__init__(message, details={"service": "auth"})


# =============================================================================
# RESPONSES
# =============================================================================

def get_correlation_id(request: Optional[Request] = None) -> Optional[str]:
    """Extract correlation ID from request state."""
    if request is None:
        return None
    return getattr(request.state, "correlation_id", None)


def error_response(
    code: ErrorCode,
    message: str,
    status_code: int,
    details: Optional[dict[str, Any]] = None,
    correlation_id: Optional[str] = None,
) -> JSONResponse:
    """
    Create a standardized JSON error response.

    Args:
        code: Error code from ErrorCode enum
        message: Human-readable error message
        status_code: HTTP status code
        details: Optional additional error details
        correlation_id: Request correlation ID for tracing

    Returns:
        JSONResponse with standardized error format
    """
    error_detail = ErrorDetail(
        code=code.value,
        message=message,
        details=details,
        correlation_id=correlation_id,
    )
    return JSONResponse(
        status_code=status_code,
        content={"error": error_detail.model_dump(exclude_none=True)},
    )


async def mindwell_error_handler(request: Request, exc: MindWellError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s: %s", exc.code.value, sanitize_for_logging(exc.message, max_len=300), extra={"path": request.url.path})
    else:
        logger.info("%s: %s", exc.code.value, sanitize_for_logging(exc.message, max_len=300), extra={"path": request.url.path})
    return error_response(
        code=exc.code,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        correlation_id=get_correlation_id(request),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render FastAPI body/query validation failures as PARSE_ERROR or VALIDATION_ERROR."""
    errors = exc.errors()
    if any(err.get("type") == "json_invalid" for err in errors):
        error = ParseError("Failed to parse request body as JSON.")
    else:
        fields = [
            ".".join(str(part) for part in err.get("loc", ()) if part != "body")
            for err in errors
        ]
        error = ValidationError("Missing or invalid fields in request.", field=", ".join(fields) or None)
    return await mindwell_error_handler(request, error)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the service's error handlers to a FastAPI app."""
    app.add_exception_handler(MindWellError, mindwell_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
