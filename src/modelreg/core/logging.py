"""
Structured logging for the registry.

One ``configure_logging()`` call at process start (API lifespan or CLI
callback) sets up structlog; every module then logs through
``get_logger(__name__)`` with an event name plus key/value fields.

Output formats:
    - ``console``: coloured, human-readable (development)
    - ``json``: one JSON object per line with ECS-style ``@timestamp`` and
      ``log.level`` keys (log aggregation)

Examples:
    >>> from modelreg.core.logging import configure_logging, get_logger
    >>> configure_logging(level="INFO", log_format="json")
    >>> logger = get_logger(__name__)
    >>> logger.info("models_index_created", index=".zentity-models")

Tags:
    logging, structlog, observability, json-logging, modelreg

Doc-Types:
    - API Reference
    - Observability Guide
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Literal, TextIO

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

_SERVICE_NAME = "modelreg"
_configured = False


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def _ecs_compatible(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Rename timestamp/level to their ECS field names."""
    if "timestamp" in event_dict:
        event_dict["@timestamp"] = event_dict.pop("timestamp")
    if "level" in event_dict:
        event_dict["log.level"] = event_dict.pop("level")
    return event_dict


def configure_logging(
    level: str = "INFO",
    log_format: Literal["json", "console"] | None = None,
    service: str = "modelreg",
    force: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Configure structured logging for the process.

    Subsequent calls are no-ops unless ``force=True``.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_format: ``json``, ``console``, or None to pick JSON when stdout
            is not a TTY
        service: Service name included in every event
        force: Reconfigure even if already configured
        stream: Where log lines go (default stdout; the CLI uses stderr so
            stdout carries only command output)
    """
    global _SERVICE_NAME, _configured

    if _configured and not force:
        return

    _SERVICE_NAME = service
    log_level = getattr(logging, level.upper())

    stream = stream or sys.stdout
    if log_format is None:
        log_format = "console" if stream.isatty() else "json"

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_service_metadata,
    ]

    renderer: Processor
    if log_format == "json":
        processors.append(_ecs_compatible)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    structlog.configure(
        processors=[*processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )

    # Third-party libraries (httpx, uvicorn) log through stdlib
    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=log_level,
        force=True,
    )

    _configured = True


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (usually ``get_logger(__name__)``)."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context to include in all subsequent logs of this task."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific keys from logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound context."""
    structlog.contextvars.clear_contextvars()


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
]
