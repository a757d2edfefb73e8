"""OpenTelemetry tracing configuration.

Spans are emitted around storage round trips (``doggo_db.save`` and
``doggo_db.load``). Without setup_tracing() the OpenTelemetry API hands out
no-op spans, so tracing costs nothing until a host application opts in.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.trace import Status, StatusCode

from doggo_db.domain.errors import DoggoDBError

INSTRUMENTATION_NAME = "doggo_db"

_tracer: trace.Tracer | None = None


def setup_tracing(
    service_name: str = "doggo_db",
    otlp_endpoint: str | None = None,
    console_export: bool = False,
) -> trace.Tracer:
    """
    Install a tracer provider for the store.

    Args:
        service_name: ``service.name`` resource attribute
        otlp_endpoint: OTLP gRPC collector endpoint (e.g. "http://localhost:4317")
        console_export: Also print finished spans to stdout

    Returns:
        The store's tracer
    """
    global _tracer

    from doggo_db import __version__

    provider = TracerProvider(
        resource=Resource.create(
            {"service.name": service_name, "service.version": __version__}
        )
    )

    if otlp_endpoint:
        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
        )
    if console_export:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)

    _tracer = provider.get_tracer(INSTRUMENTATION_NAME, __version__)
    return _tracer


def get_tracer() -> trace.Tracer:
    """Get the store's tracer, falling back to the global provider."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(INSTRUMENTATION_NAME)
    return _tracer


@contextmanager
def trace_span(
    name: str,
    attributes: dict[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """
    Run a block inside a span.

    Store errors mark the span as failed with the error class as
    ``doggo_db.error``; the exception propagates unchanged.

    Args:
        name: Span name, e.g. "doggo_db.save"
        attributes: Span attributes set before the block runs

    Yields:
        The active span
    """
    with get_tracer().start_as_current_span(name, attributes=attributes) as span:
        try:
            yield span
        except DoggoDBError as e:
            span.set_attribute("doggo_db.error", type(e).__name__)
            span.set_status(Status(StatusCode.ERROR, str(e)))
            raise
