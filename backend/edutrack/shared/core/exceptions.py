"""
Custom Exceptions

Application-specific exceptions with HTTP status codes and error codes.

Exception Hierarchy:
====================
    EdutrackException (base)
       │
       ├── AuthenticationError (401)      ← Missing or invalid bearer token
       ├── AuthorizationError (403)       ← Role not allowed for the operation
       ├── NotFoundError (404)            ← Resource not found
       │      ├── UserNotFoundError
       │      └── ContentNotFoundError
       ├── ValidationError (400)          ← Invalid input data
       │      └── TargetingValidationError
       ├── ConflictError (409)            ← Illegal state transition
       └── ServiceUnavailableError (503)  ← Backing store unavailable
              └── AudienceResolutionError

Usage:
======
    from edutrack.shared.core.exceptions import ContentNotFoundError

    raise ContentNotFoundError(str(content_id))
    # {"error": {"code": "NOT_FOUND", "message": "Content with id '...' not found"}}

Exception Handling:
===================
    Exceptions are caught by the API error handlers and converted to JSON:
    {
        "error": {
            "code": "NOT_FOUND",
            "message": "Content with id 'abc-123' not found",
            "details": {}
        }
    }
"""

from typing import Any, Optional


class EdutrackException(Exception):
    """
    Base exception for all Edutrack application errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dictionary with error details for JSON response
        """
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# AUTHENTICATION & AUTHORIZATION ERRORS (401, 403)
# ═══════════════════════════════════════════════════════════════════════════════


class AuthenticationError(EdutrackException):
    """Bearer token missing, expired or malformed (401)."""

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTHENTICATION_ERROR",
            details=details,
        )


class AuthorizationError(EdutrackException):
    """
    Authorization failed error (403 Forbidden).

    Raised when a manager reaches an admin-only operation, or tries to author
    content while self-service authoring is disabled.
    """

    def __init__(
        self,
        message: str = "Access denied",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=403,
            error_code="AUTHORIZATION_ERROR",
            details=details,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(EdutrackException):
    """
    Resource not found error (404 Not Found).

    Example:
        raise NotFoundError("User", user_id)
        # Message: "User with id 'abc-123' not found"
    """

    def __init__(
        self,
        resource: str,
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
            details=details,
        )


class UserNotFoundError(NotFoundError):
    """User not found error."""

    def __init__(self, user_id: str) -> None:
        super().__init__(resource="User", resource_id=user_id)


class ContentNotFoundError(NotFoundError):
    """
    Content item not found error.

    Also used when the item exists but the caller is outside its audience,
    so hidden items are indistinguishable from missing ones.
    """

    def __init__(self, content_id: str) -> None:
        super().__init__(resource="Content", resource_id=content_id)


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION & CONFLICT ERRORS (400, 409)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(EdutrackException):
    """Input data failed validation (400)."""

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=details,
        )


class TargetingValidationError(ValidationError):
    """
    Targeting selection rejected at the authoring boundary.

    A group-targeted item needs at least one group and an individually
    targeted item needs at least one user. An empty group selection must
    never reach storage, because the resolver reads it as "open to all".
    """

    def __init__(
        self,
        message: str,
        targeting_type: str,
    ) -> None:
        super().__init__(
            message=message,
            details={"targeting_type": targeting_type},
        )


class ConflictError(EdutrackException):
    """
    Resource conflict error (409 Conflict).

    Example:
        raise ConflictError("Content is already approved")
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT",
            details=details,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# SERVICE ERRORS (503)
# ═══════════════════════════════════════════════════════════════════════════════


class ServiceUnavailableError(EdutrackException):
    """Service temporarily unavailable error (503)."""

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        error_code: str = "SERVICE_UNAVAILABLE",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=503,
            error_code=error_code,
            details=details,
        )


class AudienceResolutionError(ServiceUnavailableError):
    """
    One or more input fetches failed while resolving an audience.

    The listing fails closed: nothing is shown rather than rendering with an
    incomplete membership or targeting picture. The message stays generic;
    the failed source names go into details for logs and retries.
    """

    def __init__(self, failed_sources: list[str]) -> None:
        super().__init__(
            message="Content is temporarily unavailable, please retry",
            error_code="AUDIENCE_UNAVAILABLE",
            details={"failed_sources": failed_sources, "retryable": True},
        )
        self.failed_sources = failed_sources
