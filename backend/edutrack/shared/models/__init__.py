"""
Edutrack SQLAlchemy Models

Default persistence adapter for the audience engine.

Model Hierarchy:
================
    User
       └── group_links (UserGroup[])
              └── group (Group)

    ContentItem (education | best_practice)
       ├── target_groups (ContentTargetGroup[])
       ├── target_users  (ContentTargetUser[])
       └── read_states   (ReadState[])

Usage:
======
    from edutrack.shared.models import ContentItem, ReadState
"""

from edutrack.shared.models.base import Base, TimestampMixin
from edutrack.shared.models.enums import (
    UserRole,
    ContentCollection,
    TargetingType,
    ApprovalStatus,
    ContentCategory,
)
from edutrack.shared.models.user import User
from edutrack.shared.models.group import Group
from edutrack.shared.models.user_group import UserGroup
from edutrack.shared.models.content_item import ContentItem
from edutrack.shared.models.content_target import ContentTargetGroup, ContentTargetUser
from edutrack.shared.models.read_state import ReadState, READ_STATE_CONFLICT_KEY

__all__ = [
    # Base classes and mixins
    "Base",
    "TimestampMixin",
    # Enums
    "UserRole",
    "ContentCollection",
    "TargetingType",
    "ApprovalStatus",
    "ContentCategory",
    # Models
    "User",
    "Group",
    "UserGroup",
    "ContentItem",
    "ContentTargetGroup",
    "ContentTargetUser",
    "ReadState",
    "READ_STATE_CONFLICT_KEY",
]
