"""
Group Entity Model

A named cohort of staff. Targeting rows reference groups by NAME, so the
name is unique and acts as the join key for audience resolution.
"""

from typing import TYPE_CHECKING
import uuid

from sqlalchemy import String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from edutrack.shared.models.base import Base, TimestampMixin


if TYPE_CHECKING:
    from edutrack.shared.models.user_group import UserGroup


class Group(Base, TimestampMixin):
    """
    Group model.

    Attributes:
        id: Unique identifier (UUID v4)
        name: Unique group name, e.g. "여자 매니저"

    Relationships:
        member_links: Membership rows of this group
    """

    __tablename__ = "groups"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
    )

    member_links: Mapped[list["UserGroup"]] = relationship(
        "UserGroup",
        back_populates="group",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Group(id={self.id}, name={self.name})>"
