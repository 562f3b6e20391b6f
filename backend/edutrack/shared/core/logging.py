"""
Logging Configuration

Structured logging for Edutrack, built on structlog.

Log Output:
===========
Development:
    2026-02-17 10:30:00 [info     ] Visible posts resolved   user_id=550e8400-... visible=12

Production (JSON):
    {"timestamp": "2026-02-17T10:30:00", "level": "info", "event": "Visible posts resolved", "visible": 12}

Usage:
======
    from edutrack.shared.core.logging import logger, get_logger, log_context

    logger.info("Visible posts resolved", user_id=user_id, visible=len(posts))

    audience_logger = get_logger("audience")
    audience_logger.warning("Read acknowledgment retry", attempt=2)

    # Bind request scoped values (cleared by clear_log_context)
    log_context(request_id=request_id, user_id=user_id)
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import Processor

from edutrack.config.settings import settings


def setup_logging() -> None:
    """
    Configure structlog and the stdlib root logger.

    Development gets colored console output, every other environment
    gets one JSON object per line. Called once when this module is imported.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper()),
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.is_development:
        processors: list[Processor] = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name, e.g. "audience" or "authoring"

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> None:
    """
    Bind key/value pairs that every following log call will include.

    Example:
        log_context(request_id="abc-123", user_id="user-456")
        logger.info("Listing started")  # carries request_id and user_id
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context() -> None:
    """Drop all bound context variables (end of request)."""
    structlog.contextvars.clear_contextvars()


setup_logging()

logger = get_logger("edutrack")
