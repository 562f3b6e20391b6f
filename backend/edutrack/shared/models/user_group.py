"""
UserGroup Entity Model

Junction table linking Users to Groups (many-to-many). A user may belong to
zero, one, or many groups.

SAMPLE USER_GROUP RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ user_id          │ 550e8400-e29b-41d4-a716-446655440000                      │
│ group_id         │ 660e8400-e29b-41d4-a716-446655440000                      │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING
import uuid

from sqlalchemy import ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from edutrack.shared.models.base import Base


if TYPE_CHECKING:
    from edutrack.shared.models.group import Group
    from edutrack.shared.models.user import User


class UserGroup(Base):
    """
    UserGroup model - one membership edge.

    Attributes:
        user_id: Member (part of composite PK)
        group_id: Group (part of composite PK)
    """

    __tablename__ = "user_groups"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )

    group_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("groups.id", ondelete="CASCADE"),
        primary_key=True,
    )

    user: Mapped["User"] = relationship(
        "User",
        back_populates="group_links",
    )

    group: Mapped["Group"] = relationship(
        "Group",
        back_populates="member_links",
    )

    def __repr__(self) -> str:
        return f"<UserGroup(user_id={self.user_id}, group_id={self.group_id})>"
