"""
Optional OpenTelemetry tracing for MindWell.

Off unless ``OTEL_ENABLED=true``. When off, ``get_tracer`` hands out the
OpenTelemetry no-op tracer, so workflow spans cost nothing.

Spans recorded by the journal workflow:
    journal.insert    saving the entry
    oracle.generate   asking Claude for the insight
    journal.annotate  writing the insight onto the entry
"""

import logging
import os
from contextlib import contextmanager
from typing import Iterator, Optional

from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.trace import Span, Tracer

from mindwell.core.config import settings

logger = logging.getLogger("MindWell.Tracing")

_provider: Optional[TracerProvider] = None


def setup_tracing(service_name: Optional[str] = None) -> Optional[TracerProvider]:
    """Install a console-exporting tracer provider once per process."""
    global _provider

    if _provider is not None or not settings.OTEL_ENABLED:
        return _provider

    name = service_name or os.getenv("OTEL_SERVICE_NAME") or settings.SERVICE_NAME
    _provider = TracerProvider(resource=Resource.create({SERVICE_NAME: name}))
    _provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(_provider)

    logger.info("Tracing enabled for %s", name)
    return _provider


def shutdown_tracing() -> None:
    """Flush pending spans."""
    global _provider

    if _provider is not None:
        _provider.shutdown()
        _provider = None


def instrument_app(app) -> None:
    if settings.OTEL_ENABLED:
        FastAPIInstrumentor.instrument_app(app)


def get_tracer(name: str) -> Tracer:
    return trace.get_tracer(name)


@contextmanager
def workflow_span(tracer: Tracer, name: str, entry_id: Optional[str] = None) -> Iterator[Span]:
    """Span for one journal workflow step, tagged with the entry id when known."""
    with tracer.start_as_current_span(name) as span:
        if entry_id:
            span.set_attribute("journal.entry_id", entry_id)
        yield span


def current_trace_id() -> Optional[str]:
    """Hex trace id of the active span, None outside a recorded span."""
    context = trace.get_current_span().get_span_context()
    if not context.is_valid:
        return None
    return format(context.trace_id, "032x")
