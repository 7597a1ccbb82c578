"""
Correlation IDs for MindWell requests.

Each request carries an ID taken from ``X-Correlation-ID`` (or
``X-Request-ID``), or a fresh short one. It is echoed on the response, put on
``request.state`` for error envelopes, and kept in a context variable so log
records pick it up.

A journal entry's insight is generated after its response has been sent;
``CorrelationContext`` lets that background work log under the ID of the
request that saved the entry.
"""

import contextvars
import uuid
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

RESPONSE_HEADER = "X-Correlation-ID"
REQUEST_HEADERS = (RESPONSE_HEADER, "X-Request-ID")

_current_id: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "correlation_id", default=None
)


def get_correlation_id() -> Optional[str]:
    return _current_id.get()


def new_correlation_id() -> str:
    return uuid.uuid4().hex[:8]


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Binds a correlation ID to every request and echoes it back."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        incoming = next(
            (request.headers[h] for h in REQUEST_HEADERS if request.headers.get(h)),
            None,
        )
        correlation_id = incoming or new_correlation_id()
        request.state.correlation_id = correlation_id

        token = _current_id.set(correlation_id)
        try:
            response = await call_next(request)
        finally:
            _current_id.reset(token)

        response.headers[RESPONSE_HEADER] = correlation_id
        return response


class CorrelationContext:
    """
    Run a block under a given correlation ID (or a new one).

    Example:
        with CorrelationContext(submitting_request_id):
            await workflow.annotate(owner_id, entry_id, content)
    """

    def __init__(self, correlation_id: Optional[str] = None):
        self.correlation_id = correlation_id or new_correlation_id()
        self._token: Optional[contextvars.Token] = None

    def __enter__(self) -> str:
        self._token = _current_id.set(self.correlation_id)
        return self.correlation_id

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _current_id.reset(self._token)
            self._token = None
