"""Structured logging configuration.

The store is a library embedded in a host application. Until
setup_logging() runs, and unless the host has configured structlog itself,
only warnings and errors are printed, to stderr. Every event carries the
name of the module that emitted it under ``logger_name``.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

SERVICE_NAME = "doggo_db"


def _add_service(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    # sys.stderr is looked up per logger so redirected streams are honoured
    return structlog.PrintLogger(file=sys.stderr)


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        _add_service,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
    stream: TextIO | None = None,
) -> None:
    """
    Set up structured logging with structlog.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format ('json' or 'console')
        stream: Output stream (stderr if None)
    """
    numeric_level = getattr(logging, level.upper())

    logging.basicConfig(format="%(message)s", stream=stream or sys.stderr, level=numeric_level)

    if log_format == "json":
        processors: list[Processor] = [
            *_shared_processors(),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *_shared_processors(),
            structlog.dev.ConsoleRenderer(colors=(stream or sys.stderr).isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream) if stream else _stderr_logger,
        cache_logger_on_first_use=False,
    )


def reset_logging() -> None:
    """Restore the quiet default: warnings and errors only, to stderr."""
    structlog.reset_defaults()
    structlog.configure(
        processors=[*_shared_processors(), structlog.processors.JSONRenderer()],
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=_stderr_logger,
    )


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """
    Get a bound logger instance.

    The logger stays lazy, so it picks up a later setup_logging() call.

    Args:
        name: Logger name (module name typically), bound as ``logger_name``
        **initial_context: Initial context to bind to the logger

    Returns:
        A bound structlog logger
    """
    if name:
        initial_context.setdefault("logger_name", name)
    return structlog.get_logger(**initial_context)


if not structlog.is_configured():
    reset_logging()
