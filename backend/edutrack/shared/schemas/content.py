"""
Content Schemas

Request and response bodies of the post endpoints (education posts and
best-practice posts share them).
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from edutrack.shared.models.enums import ApprovalStatus, ContentCollection, TargetingType
from edutrack.shared.schemas.common import BaseSchema
from edutrack.shared.schemas.entities import ContentItemRecord, VisiblePost


# ═══════════════════════════════════════════════════════════════════════════════
# REQUEST SCHEMAS
# ═══════════════════════════════════════════════════════════════════════════════


class TargetingRequest(BaseSchema):
    """
    Targeting selection.

    Example:
        {"targeting_type": "group", "group_names": ["신입", "강남점"]}
        {"targeting_type": "individual", "user_ids": ["550e8400-..."]}
    """

    targeting_type: TargetingType
    group_names: list[str] = Field(default_factory=list)
    user_ids: list[UUID] = Field(default_factory=list)


class CreatePostRequest(BaseSchema):
    """Request body for creating a post."""

    title: str = Field(..., min_length=1, max_length=200)
    body: str = Field(default="", max_length=50000)
    category: Optional[str] = Field(
        default=None,
        max_length=100,
        description="Education category, or free-text situation tag of a best practice",
    )
    targeting: TargetingRequest


# ═══════════════════════════════════════════════════════════════════════════════
# RESPONSE SCHEMAS
# ═══════════════════════════════════════════════════════════════════════════════


class PostResponse(BaseSchema):
    """A post as stored."""

    id: UUID
    collection: ContentCollection
    title: str
    body: str
    category: Optional[str] = None
    targeting_type: TargetingType
    approval_status: ApprovalStatus
    author_id: Optional[UUID] = None
    created_at: datetime

    @classmethod
    def from_record(cls, record: ContentItemRecord) -> "PostResponse":
        return cls.model_validate(record)


class VisiblePostResponse(PostResponse):
    """A post with the caller's read mark."""

    is_read: bool = False
    read_at: Optional[datetime] = None

    @classmethod
    def from_visible(cls, post: VisiblePost) -> "VisiblePostResponse":
        return cls(
            **post.item.model_dump(),
            is_read=post.is_read,
            read_at=post.read_at,
        )


class PostListResponse(BaseSchema):
    """Visible posts of one collection, newest first."""

    items: list[VisiblePostResponse]
    total: int
    unread_count: int


class ReviewQueueResponse(BaseSchema):
    """Pending education posts awaiting approval."""

    items: list[PostResponse]
    total: int
