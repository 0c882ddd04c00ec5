"""
Structured logging for flagstate.

Configures structlog once per process and hands out bound loggers. Loggers
wrap the stdlib ``flagstate`` logger, which carries a ``NullHandler`` until
``configure_logging`` runs, so a host that never configures flagstate gets no
output from it. Register writes log at DEBUG.

Architecture:
    ::

        configure_logging(level="INFO", json_format=None, service="flagstate")
            │
            ▼
        structlog processor chain:
          1. TimeStamper(iso)
          2. merge_contextvars
          3. add_log_level
          4. add_service_metadata
          5. JSONRenderer (non-tty) or ConsoleRenderer (tty)
            │
            ▼
        stdlib logger "flagstate" ─► StreamHandler(stdout)

Examples:
    >>> from flagstate.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=True)
    >>> logger = get_logger(__name__)
    >>> logger.debug("flags_added", flag=0b11, current=0b11)

    Scoped context:

    >>> with LogContext(register="session"):
    ...     logger.info("flags_reset")

Tags:
    logging, structlog, observability, flagstate
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

_SERVICE_NAME = "flagstate"
ROOT_LOGGER = "flagstate"

_handler: logging.Handler | None = None

logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "flagstate",
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging for the process.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
        service: Service name to include in logs
        add_timestamp: Include ISO timestamp in logs
    """
    global _SERVICE_NAME, _handler
    _SERVICE_NAME = service
    numeric_level = getattr(logging, level.upper())

    if json_format is None:
        json_format = not sys.stdout.isatty()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
    ]

    if add_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # rendered events reach stdout through the package logger only
    package_logger = logging.getLogger(ROOT_LOGGER)
    if _handler is not None:
        package_logger.removeHandler(_handler)
    _handler = logging.StreamHandler(sys.stdout)
    _handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(_handler)
    package_logger.setLevel(numeric_level)
    package_logger.propagate = False


def configure_from_settings(settings: Any = None) -> None:
    """Configure logging from ``FlagStateSettings`` (cached settings by default)."""
    from flagstate.core.settings import get_settings

    settings = settings or get_settings()
    configure_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        service=settings.service_name,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger.

    Wraps the stdlib logger ``name`` (the ``flagstate`` package logger when
    omitted), so nothing is emitted until ``configure_logging`` attaches a
    handler or the host configures stdlib logging itself.

    Args:
        name: Logger name (usually __name__), bound as ``logger_name``
    """
    if name is None:
        return structlog.wrap_logger(logging.getLogger(ROOT_LOGGER))
    return structlog.wrap_logger(logging.getLogger(name), logger_name=name)


def bind_context(**kwargs: Any) -> None:
    """Bind context to include in all subsequent logs on this thread."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific keys from logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound context."""
    structlog.contextvars.clear_contextvars()


class LogContext:
    """Context manager for scoped logging context.

    Example:
        with LogContext(register="session"):
            logger.info("flags_cleared")
        # Context cleared here
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs

    def __enter__(self) -> LogContext:
        bind_context(**self._context)
        return self

    def __exit__(self, *args) -> None:
        unbind_context(*self._context.keys())


__all__ = [
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
]
