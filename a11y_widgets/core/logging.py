"""Structured logging configuration using structlog.

Controllers log every transition at debug level and every absorbed host
failure at warning level. The host decides the output format once at
startup: pretty-printed for development, JSON for production.

Usage:
    from a11y_widgets.core.logging import get_logger, configure_logging

    # At host startup
    configure_logging(development=True)  # or False for production

    # In modules
    logger = get_logger(__name__)
    logger.debug("carousel_advanced", active_index=2, count=3)
"""

import logging
import sys
from os import getenv
from typing import Any, cast

import structlog
from structlog.types import Processor


def configure_logging(
    development: bool | None = None,
    log_level: str | None = None,
) -> None:
    """Configure structured logging for the host process.

    Args:
        development: If True, use pretty-printed output. If False, use JSON.
                    If None, reads from ENVIRONMENT env var (default: development).
        log_level: Log level string (DEBUG, INFO, WARNING, ERROR).
                  If None, reads from LOG_LEVEL env var (default: INFO).
    """
    if development is None:
        env = getenv("ENVIRONMENT", "development").lower()
        development = env != "production"

    if log_level is None:
        log_level = getenv("LOG_LEVEL", "INFO").upper()

    # Unknown level names fall back to INFO
    numeric_level = getattr(logging, log_level, logging.INFO)

    # Processors shared by the console and JSON renderers
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if development:
        # Development: colored key=value lines for a terminal
        processors: list[Processor] = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        # Production: one JSON object per line for log aggregation
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    # Route structlog through the stdlib logging tree
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # force=True overrides whatever the host configured before us
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
        force=True,
    )
    # Also set the root logger level explicitly
    logging.getLogger().setLevel(numeric_level)

    # asyncio logs every slow callback at debug level; timers make that noisy
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name, typically __name__ of the calling module.

    Returns:
        A bound structlog logger instance.
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))


def bind_contextvars(**kwargs: Any) -> None:
    """Bind context variables included in all subsequent log calls.

    Hosts use this to tag logs with the widget instance being driven.

    Example:
        bind_contextvars(widget="carousel", widget_id="hero")
        logger.debug("carousel_paused")  # includes widget and widget_id
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_contextvars() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


def unbind_contextvars(*keys: str) -> None:
    """Remove specific context variables.

    Args:
        *keys: Names of context variables to remove.
    """
    structlog.contextvars.unbind_contextvars(*keys)
