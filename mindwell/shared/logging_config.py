"""
Logging setup for the MindWell service.

One handler on stdout. In production each record is a JSON line:

    {"timestamp": "...", "level": "INFO", "logger": "MindWell.Journaling.Annotation",
     "message": "Entry 42 annotated", "service": "mindwell-service",
     "correlation_id": "1f3a9c2e", "entry_id": "42"}

With ``ENVIRONMENT=development`` records are printed as plain text instead.
Fields passed through ``extra=`` (entry_id, reason, update_status...) are
carried into both formats.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from mindwell.core.config import settings
from mindwell.core.tracing import current_trace_id
from mindwell.shared.correlation import get_correlation_id

# Attributes every LogRecord has; anything else came from ``extra=``
_RECORD_FIELDS = set(vars(logging.makeLogRecord({}))) | {"message", "correlation_id", "taskName"}

_QUIET_LOGGERS = ("httpx", "httpcore", "hpack", "anthropic", "postgrest", "supabase", "gotrue")


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_FIELDS and not key.startswith("_")
    }


class CorrelationIdFilter(logging.Filter):
    """Stamps each record with the active correlation ID ("-" when none)."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = get_correlation_id() or "-"
        return True


class JSONFormatter(logging.Formatter):
    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
        }

        correlation_id = getattr(record, "correlation_id", "-")
        if correlation_id != "-":
            entry["correlation_id"] = correlation_id

        trace_id = current_trace_id()
        if trace_id:
            entry["trace_id"] = trace_id

        entry.update(_extra_fields(record))

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class DevelopmentFormatter(logging.Formatter):
    """``HH:MM:SS LEVEL [correlation] logger: message | extras``"""

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        line = (
            f"{stamp} {record.levelname:<7} [{getattr(record, 'correlation_id', '-')}] "
            f"{record.name}: {record.getMessage()}"
        )

        extras = _extra_fields(record)
        if extras:
            line += " | " + ", ".join(f"{k}={v}" for k, v in extras.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(
    service_name: str,
    level: Optional[str] = None,
    json_output: Optional[bool] = None,
) -> None:
    """
    Replace the root handlers with a single stdout handler.

    Args:
        service_name: Value of the ``service`` field in JSON records
        level: Defaults to LOG_LEVEL (INFO)
        json_output: Defaults to True unless ENVIRONMENT is "development"
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    if json_output is None:
        json_output = settings.ENVIRONMENT.lower() != "development"

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(JSONFormatter(service_name) if json_output else DevelopmentFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("MindWell.Startup").info(
        "Logging configured",
        extra={"log_level": level_name, "json_output": json_output, "environment": settings.ENVIRONMENT},
    )
