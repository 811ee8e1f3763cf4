"""
job-spine Logging - structlog setup for the job specification core.

Manifesto:
    Freezing and staleness decisions drive what a pipeline run does, so they
    are logged as structured events rather than free text. The job type being
    frozen is carried in contextvars so every event raised while freezing it
    names the job.

Architecture:
    ::

        configure_logging(level="INFO", json_format=None, service="job-spine")
            ↓
        processors: TimeStamper(iso) → merge_contextvars → add_log_level
                    → service.name → JSONRenderer | ConsoleRenderer

        logger = get_logger(__name__)
        with LogContext(job_type="SortJob"):
            logger.debug("job.frozen", job_name="Q-100-1")

    ``RunSettings.configure_logging()`` applies the run's ``log_level``.

Tags:
    logging, structlog, observability, job-spine

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

_SERVICE_NAME = "job-spine"


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "job-spine",
) -> None:
    """Configure structlog for the process.

    Args:
        level: Minimum level (DEBUG, INFO, WARNING, ERROR)
        json_format: JSON lines if True, console if False, JSON when stdout
            is not a tty if None
        service: Value of the ``service.name`` key on every event
    """
    global _SERVICE_NAME
    _SERVICE_NAME = service

    if json_format is None:
        json_format = not sys.stdout.isatty()

    processors: list[Processor] = [
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.dev.set_exc_info,
        _add_service_metadata,
    ]
    if json_format:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    """Return a structlog logger, usually ``get_logger(__name__)``."""
    return structlog.get_logger(name)


class LogContext:
    """Bind keys to every event logged inside the ``with`` block.

    Example:
        with LogContext(job_type="SortJob"):
            logger.debug("canon.applied")  # carries job_type
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs

    def __enter__(self) -> LogContext:
        structlog.contextvars.bind_contextvars(**self._context)
        return self

    def __exit__(self, *args) -> None:
        structlog.contextvars.unbind_contextvars(*self._context)


__all__ = [
    "configure_logging",
    "get_logger",
    "LogContext",
]
