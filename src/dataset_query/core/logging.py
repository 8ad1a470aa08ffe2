"""Structured logging for the API and the engine.

The API layer logs through structlog; engine modules use stdlib
``logging`` with ``extra={...}`` fields. Both end up in one handler on the
root logger whose ``ProcessorFormatter`` renders them the same way, with
the stdlib extras lifted into the event.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from dataset_query.core.config import Settings

SERVICE_NAME = "dataset-query"


def add_service_context(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add service metadata to all log entries."""
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _renderer(settings: Settings) -> list[Processor]:
    if settings.ENVIRONMENT == "development" and sys.stderr.isatty():
        return [structlog.dev.ConsoleRenderer(colors=True)]
    return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and route stdlib records through it.

    Args:
        settings: Application settings. If None, uses defaults.
    """
    if settings is None:
        from dataset_query.core.config import get_settings

        settings = get_settings()

    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_service_context,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        # Records from stdlib loggers carry their fields as ``extra``.
        foreign_pre_chain=[structlog.stdlib.ExtraAdder(), *shared_processors],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.UnicodeDecoder(),
            *_renderer(settings),
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a configured structlog logger.

    Args:
        name: Logger name. If None, uses caller's module name.

    Returns:
        Configured bound logger with context support.
    """
    return structlog.get_logger(name)
