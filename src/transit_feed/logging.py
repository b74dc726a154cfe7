"""Structured logging configuration."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from contextlib import AbstractContextManager

    from structlog.types import Processor

from transit_feed.config import get_settings

# Parent of every logger in this package
LOADER_LOGGER = "transit_feed"

# Chatty third-party loggers capped at WARNING
_QUIET_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str | None = None, *, json_logs: bool | None = None) -> None:
    """Configure structured logging for applications embedding the loader.

    Args:
        level: Root log level. Defaults to ``LOG_LEVEL``.
        json_logs: Render JSON lines instead of console output. Defaults to
            JSON everywhere except the development environment.

    The loader's own loggers follow ``GTFS_LOG_LEVEL`` when it is set, so
    per-row skip warnings can be tuned without touching the root level.
    """
    settings = get_settings()
    root_level = (level or settings.log_level).upper()
    if json_logs is None:
        json_logs = settings.environment != "development"

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_logs:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(root_level)

    loader_level = settings.loader_log_level
    logging.getLogger(LOADER_LOGGER).setLevel(
        loader_level.upper() if loader_level else logging.NOTSET
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def feed_log_context(**values: Any) -> AbstractContextManager[None]:
    """Bind ``values`` (feed URL, directory) to every event logged in the block."""
    return structlog.contextvars.bound_contextvars(**values)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.stdlib.get_logger(name)
