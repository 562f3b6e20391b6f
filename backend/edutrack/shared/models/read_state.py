"""
ReadState Entity Model

A user's acknowledgment of one content item. Rows are created lazily the
first time the user opens the item and upserted afterwards; the
(user_id, content_id) unique constraint is the upsert conflict target.

SAMPLE READ_STATE RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ user_id          │ 550e8400-e29b-41d4-a716-446655440000                      │
│ content_id       │ 770e8400-e29b-41d4-a716-446655440000                      │
│ is_read          │ true                                                       │
│ read_at          │ 2026-02-17T10:30:00Z                                      │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from edutrack.shared.models.base import Base


if TYPE_CHECKING:
    from edutrack.shared.models.content_item import ContentItem


# Columns of the uniqueness constraint used as ON CONFLICT target
READ_STATE_CONFLICT_KEY = ("user_id", "content_id")


class ReadState(Base):
    """
    ReadState model.

    Attributes:
        id: Surrogate key (UUID v4)
        user_id: Reader
        content_id: Acknowledged item
        is_read: Never flips back to False once True
        read_at: Time of the most recent acknowledgment
    """

    __tablename__ = "read_states"
    __table_args__ = (
        UniqueConstraint(*READ_STATE_CONFLICT_KEY, name="uq_read_states_user_content"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    content_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("content_items.id", ondelete="CASCADE"),
        nullable=False,
    )

    is_read: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    read_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    content_item: Mapped["ContentItem"] = relationship(
        "ContentItem",
        back_populates="read_states",
    )

    def __repr__(self) -> str:
        return f"<ReadState(user_id={self.user_id}, content_id={self.content_id}, is_read={self.is_read})>"
