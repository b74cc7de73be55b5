"""Structured logging configuration for citationcurve.

Two renderers are available:
- JSON renderer for the image/embed service (machine-readable)
- Console renderer for interactive use (human-readable)

Request-scoped context (payload size, chart options) is bound through
structlog's contextvars so every event emitted while one chart is being
served carries it, including events from the OpenAlex client.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.contextvars import bound_contextvars, merge_contextvars
from structlog.processors import (
    JSONRenderer,
    StackInfoRenderer,
    TimeStamper,
    add_log_level,
    format_exc_info,
)


def configure_logging(cli_mode: bool = False, log_level: str = "INFO") -> None:
    """Configure structlog with the appropriate renderer.

    Args:
        cli_mode: If True, render with the colored console renderer.
                  If False, render one JSON object per event.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    processors = [
        merge_contextvars,
        add_log_level,
        TimeStamper(fmt="iso"),
        StackInfoRenderer(),
        format_exc_info,
    ]

    if cli_mode:
        from structlog.dev import ConsoleRenderer
        renderer = ConsoleRenderer(colors=True)
    else:
        renderer = JSONRenderer()

    processors.append(renderer)

    level = getattr(logging, log_level.upper(), logging.INFO)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a configured logger instance.

    Args:
        name: Optional logger name (typically __name__ of the calling module)

    Returns:
        Configured structlog logger
    """
    if name:
        return structlog.get_logger(name)
    return structlog.get_logger()


@contextmanager
def request_context(**context: Any) -> Iterator[None]:
    """Bind key-value context to every log event inside the block."""
    with bound_contextvars(**context):
        yield
