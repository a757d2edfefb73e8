"""Infrastructure layer - cross-cutting concerns."""

from doggo_db.infrastructure.config import Config, get_config
from doggo_db.infrastructure.container import (
    Container,
    configure_observability,
    get_container,
    reset_container,
)
from doggo_db.infrastructure.logging import setup_logging, get_logger, reset_logging
from doggo_db.infrastructure.metrics import setup_metrics, get_metrics, MetricsRegistry
from doggo_db.infrastructure.tracing import setup_tracing, get_tracer, trace_span

__all__ = [
    "Config",
    "get_config",
    "Container",
    "get_container",
    "reset_container",
    "configure_observability",
    "setup_logging",
    "get_logger",
    "reset_logging",
    "setup_metrics",
    "get_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "get_tracer",
    "trace_span",
]
