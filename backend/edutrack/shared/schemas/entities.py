"""
Typed Entities

Explicit row types consumed and produced by the audience engine. Every
repository result is converted to one of these before it reaches the engine,
so no engine function ever handles an untyped row.

Entities:
=========
    UserRecord          id, role
    GroupRecord         id, name
    MembershipRecord    user_id → group_id
    ContentItemRecord   one post of either collection
    TargetGroupRecord   content_id → group_name
    TargetUserRecord    content_id → user_id
    ReadStateRecord     user_id, content_id, is_read, read_at

Derived values:
===============
    ReadMark            (is_read, read_at) for one item; UNREAD when absent
    VisiblePost         item joined with its ReadMark
    ProgressStat / CategoryProgress / ProgressReport
    ManagerProgress     one row of the admin overview
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from edutrack.shared.models.enums import (
    ApprovalStatus,
    ContentCollection,
    TargetingType,
    UserRole,
)
from edutrack.shared.schemas.common import RecordSchema


# ═══════════════════════════════════════════════════════════════════════════════
# ROWS
# ═══════════════════════════════════════════════════════════════════════════════


class UserRecord(RecordSchema):
    """A staff account."""

    id: UUID
    role: UserRole
    username: str = ""
    nickname: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class GroupRecord(RecordSchema):
    """A named cohort."""

    id: UUID
    name: str


class MembershipRecord(RecordSchema):
    """User ∈ Group edge."""

    user_id: UUID
    group_id: UUID


class ContentItemRecord(RecordSchema):
    """
    A distributable post.

    `category` holds the education category, or the free-text situation tag
    of a best-practice post. `approval_status` is always APPROVED for
    best-practice posts.
    """

    id: UUID
    collection: ContentCollection
    title: str
    body: str = ""
    category: Optional[str] = None
    targeting_type: TargetingType
    approval_status: ApprovalStatus = ApprovalStatus.APPROVED
    author_id: Optional[UUID] = None
    created_at: datetime

    @property
    def is_pending(self) -> bool:
        return self.approval_status == ApprovalStatus.PENDING


class TargetGroupRecord(RecordSchema):
    """Content → group-name edge."""

    content_id: UUID
    group_name: str


class TargetUserRecord(RecordSchema):
    """Content → user edge."""

    content_id: UUID
    user_id: UUID


class ReadStateRecord(RecordSchema):
    """Stored acknowledgment of one item by one user."""

    user_id: UUID
    content_id: UUID
    is_read: bool
    read_at: Optional[datetime] = None


# ═══════════════════════════════════════════════════════════════════════════════
# DERIVED VALUES
# ═══════════════════════════════════════════════════════════════════════════════


class ReadMark(RecordSchema):
    """Read flag and timestamp of one item for one user."""

    is_read: bool = False
    read_at: Optional[datetime] = None


# What a missing read-map entry means
UNREAD = ReadMark()


class VisiblePost(RecordSchema):
    """A visible item with the requesting user's read mark."""

    item: ContentItemRecord
    is_read: bool = False
    read_at: Optional[datetime] = None


class ProgressStat(RecordSchema):
    """Read / total / percentage triple."""

    read: int = Field(ge=0)
    total: int = Field(ge=0)
    percentage: int = Field(ge=0, le=100)


class CategoryProgress(ProgressStat):
    """Progress of one category bucket."""

    category: str


class ProgressReport(RecordSchema):
    """Overall and per-category progress of one user."""

    overall: ProgressStat
    per_category: list[CategoryProgress]


class ManagerProgress(RecordSchema):
    """One manager's row in the admin progress overview."""

    user_id: UUID
    username: str
    nickname: Optional[str] = None
    read: int
    total: int
    unread: int
    percentage: int
