"""
Common Schemas

Shared schemas used across the application for consistent API responses.

Schema Types:
=============
- BaseSchema: Mutable base with ORM support (request/response bodies)
- RecordSchema: Frozen base for typed rows handed to the engine
- Standard responses: ErrorResponse, HealthResponse

Usage:
======
    from edutrack.shared.schemas.common import BaseSchema, RecordSchema

    class PostResponse(BaseSchema):
        id: UUID
        title: str
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    - from_attributes: Allow creating from ORM models
    - populate_by_name: Allow field population by name or alias
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


class RecordSchema(BaseModel):
    """
    Immutable, hashable row type.

    Built from ORM instances with `model_validate(row)`; extra ORM attributes
    are ignored so the engine only ever sees the declared fields.
    """

    model_config = ConfigDict(
        from_attributes=True,
        frozen=True,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# STANDARD RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════


class ErrorDetail(BaseModel):
    """Error detail structure in error responses."""

    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[dict[str, Any]] = Field(
        default=None,
        description="Additional error context",
    )


class ErrorResponse(BaseModel):
    """
    Standard error response schema.

    Example:
        {
            "error": {
                "code": "AUDIENCE_UNAVAILABLE",
                "message": "Content is temporarily unavailable, please retry",
                "details": {"failed_sources": ["target_groups"], "retryable": true}
            }
        }
    """

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = "healthy"
    service: str = "edutrack"
    version: str = "1.0.0"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
