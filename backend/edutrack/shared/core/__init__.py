"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions

Usage:
======
    from edutrack.shared.core.logging import logger, get_logger
    from edutrack.shared.core.exceptions import EdutrackException, NotFoundError

    logger.info("Approving content", content_id=content_id)
"""

from edutrack.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from edutrack.shared.core.exceptions import (
    EdutrackException,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    UserNotFoundError,
    ContentNotFoundError,
    ValidationError,
    TargetingValidationError,
    ConflictError,
    ServiceUnavailableError,
    AudienceResolutionError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "EdutrackException",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "UserNotFoundError",
    "ContentNotFoundError",
    "ValidationError",
    "TargetingValidationError",
    "ConflictError",
    "ServiceUnavailableError",
    "AudienceResolutionError",
]
