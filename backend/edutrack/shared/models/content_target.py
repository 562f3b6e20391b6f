"""
Content Targeting Models

Per-item audience rows. Both tables are fully replaced whenever an item's
targeting is edited (delete-then-insert), never patched.

- ContentTargetGroup: item → group NAME (targeting_type = group)
- ContentTargetUser:  item → user id    (targeting_type = individual)
"""

from typing import TYPE_CHECKING
import uuid

from sqlalchemy import ForeignKey, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from edutrack.shared.models.base import Base


if TYPE_CHECKING:
    from edutrack.shared.models.content_item import ContentItem


class ContentTargetGroup(Base):
    """Group-name edge of a group-targeted item (composite PK)."""

    __tablename__ = "content_target_groups"

    content_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("content_items.id", ondelete="CASCADE"),
        primary_key=True,
    )

    # Names, not ids: renaming a group detaches it from existing items
    group_name: Mapped[str] = mapped_column(
        String(100),
        primary_key=True,
    )

    content_item: Mapped["ContentItem"] = relationship(
        "ContentItem",
        back_populates="target_groups",
    )

    def __repr__(self) -> str:
        return f"<ContentTargetGroup(content_id={self.content_id}, group={self.group_name})>"


class ContentTargetUser(Base):
    """User edge of an individually targeted item (composite PK)."""

    __tablename__ = "content_target_users"

    content_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("content_items.id", ondelete="CASCADE"),
        primary_key=True,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    content_item: Mapped["ContentItem"] = relationship(
        "ContentItem",
        back_populates="target_users",
    )

    def __repr__(self) -> str:
        return f"<ContentTargetUser(content_id={self.content_id}, user_id={self.user_id})>"
