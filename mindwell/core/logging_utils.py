"""
Helpers that keep personal data out of MindWell's logs.

Journal text, mood notes, insights, emails and credentials must never reach a
log line verbatim. Log sizes with ``describe_text`` and pass anything else
through ``sanitize_for_logging`` first.
"""
import json
import logging
import re
from typing import Any, Optional

# Dict keys whose values are always replaced, matched as substrings
REDACTED_KEYS = (
    "content", "note", "ai_insight", "email",
    "token", "password", "secret", "api_key", "authorization",
)
REDACTED = "***REDACTED***"

_EMAIL_RE = re.compile(r"\b[\w.%+-]+@[\w.-]+\.[A-Za-z]{2,}\b")
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")


def redact_emails(text: str) -> str:
    return _EMAIL_RE.sub("[EMAIL_REDACTED]", text)


def mask_email(email: str) -> str:
    """``ada@example.com`` -> ``a***@example.com``"""
    if not email or "@" not in email:
        return "***"
    local, _, domain = email.partition("@")
    return f"{local[:1]}***@{domain}"


def describe_text(text: Optional[str]) -> str:
    """Describe free text by size only, never by content."""
    if text is None:
        return "<none>"
    return f"<{len(text)} chars>"


def sanitize_for_logging(data: Any, max_len: int = 100) -> Any:
    """
    Return a log-safe copy of ``data``.

    Values under personal or secret keys are replaced, emails are redacted,
    strings are flattened to one line and cut to ``max_len`` characters.
    """
    if data is None:
        return None
    if isinstance(data, dict):
        return {
            key: REDACTED if any(k in str(key).lower() for k in REDACTED_KEYS)
            else sanitize_for_logging(value, max_len)
            for key, value in data.items()
        }
    if isinstance(data, (list, tuple)):
        return [sanitize_for_logging(item, max_len) for item in data]
    if isinstance(data, (bool, int, float)):
        return data

    text = redact_emails(_CONTROL_CHARS_RE.sub(" ", str(data)))
    return text if len(text) <= max_len else text[:max_len] + "..."


_usage_logger = logging.getLogger("MindWell.Usage")


def log_llm_usage(
    model: str,
    input_tokens: int,
    output_tokens: int,
    duration_ms: Optional[int] = None,
    endpoint: str = "journal_insight",
) -> None:
    """Emit one ``LLM_USAGE {...}`` line per Claude call for token accounting."""
    event = {
        "event": "llm_usage",
        "model": model,
        "input_tokens": input_tokens,
        "output_tokens": output_tokens,
        "total_tokens": input_tokens + output_tokens,
        "endpoint": endpoint,
    }
    if duration_ms is not None:
        event["duration_ms"] = duration_ms

    _usage_logger.info("LLM_USAGE %s", json.dumps(event))
