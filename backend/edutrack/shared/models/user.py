"""
User Entity Model

Represents a staff account. Accounts are issued by the external auth
provider; this table only mirrors the fields audience resolution needs.

SAMPLE USER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ username         │ "jimin"                                                   │
│ role             │ "manager"                                                 │
│ nickname         │ "지민"                                                    │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import Enum as SAEnum, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from edutrack.shared.models.base import Base, TimestampMixin
from edutrack.shared.models.enums import UserRole


if TYPE_CHECKING:
    from edutrack.shared.models.user_group import UserGroup


class User(Base, TimestampMixin):
    """
    User model representing a staff account.

    Attributes:
        id: Identifier shared with the auth provider
        username: Login name (unique)
        role: admin or manager
        nickname: Optional display name

    Relationships:
        group_links: Membership rows of this user
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    username: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
    )

    role: Mapped[UserRole] = mapped_column(
        SAEnum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=UserRole.MANAGER,
    )

    nickname: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )

    group_links: Mapped[list["UserGroup"]] = relationship(
        "UserGroup",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<User(id={self.id}, username={self.username}, role={self.role})>"
