"""
Repository Pattern Implementations

Repositories encapsulate SQL queries behind small, typed methods.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]       ← Generic CRUD operations
         │
         ├── UserRepository         ← Staff accounts
         ├── GroupRepository        ← Groups and membership edges
         ├── ContentRepository      ← Content items and targeting rows
         └── ReadStateRepository    ← Read states and the upsert

    SqlContentDataSource            ← AudienceDataSource / ContentStore over the above

Usage Example:
==============
    from edutrack.shared.db import AsyncSessionLocal
    from edutrack.shared.repositories import SqlContentDataSource

    source = SqlContentDataSource(AsyncSessionLocal)
    groups = await source.list_groups()
"""

from edutrack.shared.repositories.base import BaseRepository
from edutrack.shared.repositories.user_repository import UserRepository, GroupRepository
from edutrack.shared.repositories.content_repository import ContentRepository
from edutrack.shared.repositories.read_state_repository import ReadStateRepository
from edutrack.shared.repositories.data_source import (
    AudienceDataSource,
    ContentStore,
    SqlContentDataSource,
)

__all__ = [
    # Base class
    "BaseRepository",
    # Entity-specific repositories
    "UserRepository",
    "GroupRepository",
    "ContentRepository",
    "ReadStateRepository",
    # Engine boundary
    "AudienceDataSource",
    "ContentStore",
    "SqlContentDataSource",
]
