"""OpenTelemetry tracing for status checks."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
import logging
import os
import sys
from typing import Any

logger = logging.getLogger(__name__)

DISABLE_TRACING_ENV = "DEPLOYWATCH_DISABLE_TRACING"


class _NoOpSpan:
    def set_attribute(self, key: str, value: Any) -> None:
        return None


class _NoOpTracer:
    @contextmanager
    def start_as_current_span(self, name: str) -> Iterator[_NoOpSpan]:
        yield _NoOpSpan()


_NOOP_TRACER = _NoOpTracer()


def tracing_disabled() -> bool:
    return os.getenv(DISABLE_TRACING_ENV) == "1"


def setup_tracing(service_name: str, exporter: Any | None = None) -> None:
    """Configure OpenTelemetry tracing with a console exporter on stderr."""
    if tracing_disabled():
        logger.info("Tracing disabled", extra={"extra": {"service": service_name}})
        return
    from opentelemetry import trace
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    provider.add_span_processor(BatchSpanProcessor(exporter or ConsoleSpanExporter(out=sys.stderr)))
    trace.set_tracer_provider(provider)
    logger.info("Tracing configured", extra={"extra": {"service": service_name}})


def get_tracer(name: str) -> Any:
    if tracing_disabled():
        return _NOOP_TRACER
    from opentelemetry import trace

    return trace.get_tracer(name)


@contextmanager
def traced(tracer_name: str, span_name: str, **attributes: Any) -> Iterator[Any]:
    """Open a span on ``tracer_name`` and stamp it with ``attributes``."""
    with get_tracer(tracer_name).start_as_current_span(span_name) as span:
        for key, value in attributes.items():
            span.set_attribute(key, value)
        yield span
