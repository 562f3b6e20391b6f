"""
ContentItem Entity Model

A distributable post: either an educational post or a best-practice post.
Both collections share this table and the same targeting shape; the
`collection` column tells them apart.

Model Hierarchy:
================
    ContentItem
       ├── target_groups (ContentTargetGroup[])  - used when targeting_type = group
       ├── target_users  (ContentTargetUser[])   - used when targeting_type = individual
       └── read_states   (ReadState[])           - per-user acknowledgments

Deleting an item deletes all three child collections (ORM cascade plus
ON DELETE CASCADE foreign keys); orphaned read rows would skew progress.

SAMPLE CONTENT_ITEM RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ collection       │ "education"                                               │
│ title            │ "첫 인사 스크립트"                                        │
│ category         │ "여자_매니저_소개"                                        │
│ targeting_type   │ "group"                                                   │
│ approval_status  │ "approved"                                                │
│ author_id        │ 660e8400-e29b-41d4-a716-446655440000                      │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import Enum as SAEnum, ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from edutrack.shared.models.base import Base, TimestampMixin
from edutrack.shared.models.enums import ApprovalStatus, ContentCollection, TargetingType


if TYPE_CHECKING:
    from edutrack.shared.models.content_target import ContentTargetGroup, ContentTargetUser
    from edutrack.shared.models.read_state import ReadState


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class ContentItem(Base, TimestampMixin):
    """
    ContentItem model.

    Attributes:
        id: Unique identifier (UUID v4)
        collection: education or best_practice
        title: Post title
        body: Markdown body or video URL
        category: Education category, or situation tag for best-practice posts
        targeting_type: group or individual
        approval_status: pending or approved (best-practice posts are always approved)
        author_id: Author account, nulled if the account is removed
    """

    __tablename__ = "content_items"
    __table_args__ = (
        Index("ix_content_items_collection_created", "collection", "created_at"),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # CONTENT
    # ═══════════════════════════════════════════════════════════════════════════

    collection: Mapped[ContentCollection] = mapped_column(
        SAEnum(ContentCollection, name="content_collection", values_callable=_enum_values),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    body: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )

    category: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # AUDIENCE & APPROVAL
    # ═══════════════════════════════════════════════════════════════════════════

    targeting_type: Mapped[TargetingType] = mapped_column(
        SAEnum(TargetingType, name="targeting_type", values_callable=_enum_values),
        nullable=False,
        default=TargetingType.GROUP,
    )

    approval_status: Mapped[ApprovalStatus] = mapped_column(
        SAEnum(ApprovalStatus, name="approval_status", values_callable=_enum_values),
        nullable=False,
        default=ApprovalStatus.APPROVED,
        index=True,
    )

    author_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    target_groups: Mapped[list["ContentTargetGroup"]] = relationship(
        "ContentTargetGroup",
        back_populates="content_item",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    target_users: Mapped[list["ContentTargetUser"]] = relationship(
        "ContentTargetUser",
        back_populates="content_item",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    read_states: Mapped[list["ReadState"]] = relationship(
        "ReadState",
        back_populates="content_item",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return (
            f"<ContentItem(id={self.id}, collection={self.collection}, "
            f"status={self.approval_status})>"
        )
