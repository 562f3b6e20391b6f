"""
Audience Data Source

The repository contract the audience engine and its services depend on,
plus the default SQLAlchemy implementation.

Contracts:
==========
    AudienceDataSource   read side + the read-state upsert
    ContentStore         authoring writes (create, retarget, approve, delete)

Both return typed records from `edutrack.shared.schemas.entities`; no ORM
instance or raw row crosses this boundary. Services receive an instance by
injection, which keeps them testable without a database.

Concurrency:
============
An AsyncSession must not be used by concurrent tasks. SqlContentDataSource
therefore opens one short-lived session per call, so the services can issue
their independent fetches with asyncio.gather().
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Optional, Protocol, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from edutrack.shared.core.exceptions import ContentNotFoundError
from edutrack.shared.models.enums import (
    ApprovalStatus,
    ContentCollection,
    TargetingType,
    UserRole,
)
from edutrack.shared.repositories.content_repository import ContentRepository
from edutrack.shared.repositories.read_state_repository import ReadStateRepository
from edutrack.shared.repositories.user_repository import GroupRepository, UserRepository
from edutrack.shared.schemas.entities import (
    ContentItemRecord,
    GroupRecord,
    MembershipRecord,
    ReadStateRecord,
    TargetGroupRecord,
    TargetUserRecord,
    UserRecord,
)


# ═══════════════════════════════════════════════════════════════════════════════
# CONTRACTS
# ═══════════════════════════════════════════════════════════════════════════════


class AudienceDataSource(Protocol):
    """Read-side repository contract of the audience engine."""

    async def list_users(self, role: Optional[UserRole] = None) -> list[UserRecord]: ...

    async def get_user(self, user_id: UUID) -> Optional[UserRecord]: ...

    async def list_groups(self) -> list[GroupRecord]: ...

    async def list_memberships(self, user_id: Optional[UUID] = None) -> list[MembershipRecord]: ...

    async def list_content_items(
        self,
        collection: ContentCollection,
        approval_status: Optional[ApprovalStatus] = None,
    ) -> list[ContentItemRecord]: ...

    async def get_content_item(
        self,
        content_id: UUID,
        collection: Optional[ContentCollection] = None,
    ) -> Optional[ContentItemRecord]: ...

    async def list_target_groups(
        self,
        collection: ContentCollection,
        content_id: Optional[UUID] = None,
    ) -> list[TargetGroupRecord]: ...

    async def list_target_users(
        self,
        collection: ContentCollection,
        content_id: Optional[UUID] = None,
        user_id: Optional[UUID] = None,
    ) -> list[TargetUserRecord]: ...

    async def get_read_states(
        self,
        user_id: Optional[UUID] = None,
        collection: Optional[ContentCollection] = None,
    ) -> list[ReadStateRecord]: ...

    async def upsert_read_state(
        self,
        user_id: UUID,
        content_id: UUID,
        read_at: datetime,
    ) -> ReadStateRecord: ...


class ContentStore(Protocol):
    """Write-side contract used by the authoring boundary."""

    async def get_content_item(
        self,
        content_id: UUID,
        collection: Optional[ContentCollection] = None,
    ) -> Optional[ContentItemRecord]: ...

    async def create_content_item(
        self,
        *,
        collection: ContentCollection,
        title: str,
        body: str,
        category: Optional[str],
        targeting_type: TargetingType,
        approval_status: ApprovalStatus,
        author_id: UUID,
        group_names: Sequence[str],
        user_ids: Sequence[UUID],
    ) -> ContentItemRecord: ...

    async def replace_targeting(
        self,
        content_id: UUID,
        targeting_type: TargetingType,
        group_names: Sequence[str],
        user_ids: Sequence[UUID],
    ) -> ContentItemRecord: ...

    async def set_approval_status(
        self,
        content_id: UUID,
        approval_status: ApprovalStatus,
    ) -> Optional[ContentItemRecord]: ...

    async def delete_content_item(self, content_id: UUID) -> bool: ...


# ═══════════════════════════════════════════════════════════════════════════════
# SQLALCHEMY IMPLEMENTATION
# ═══════════════════════════════════════════════════════════════════════════════


class SqlContentDataSource:
    """
    AudienceDataSource and ContentStore backed by PostgreSQL.

    Args:
        session_factory: Factory producing AsyncSession instances
            (AsyncSessionLocal in production)

    Example:
        source = SqlContentDataSource(AsyncSessionLocal)
        items = await source.list_content_items(ContentCollection.EDUCATION)
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def _read(self) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            yield session

    @asynccontextmanager
    async def _write(self) -> AsyncIterator[AsyncSession]:
        """One transaction: commit on success, rollback on any exception."""
        async with self._session_factory() as session:
            async with session.begin():
                yield session

    # ═══════════════════════════════════════════════════════════════════════════
    # USERS & GROUPS
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_users(self, role: Optional[UserRole] = None) -> list[UserRecord]:
        async with self._read() as session:
            rows = await UserRepository(session).list_users(role)
            return [UserRecord.model_validate(row) for row in rows]

    async def get_user(self, user_id: UUID) -> Optional[UserRecord]:
        async with self._read() as session:
            row = await UserRepository(session).get(user_id)
            return UserRecord.model_validate(row) if row else None

    async def list_groups(self) -> list[GroupRecord]:
        async with self._read() as session:
            rows = await GroupRepository(session).list_groups()
            return [GroupRecord.model_validate(row) for row in rows]

    async def list_memberships(self, user_id: Optional[UUID] = None) -> list[MembershipRecord]:
        async with self._read() as session:
            rows = await GroupRepository(session).list_memberships(user_id)
            return [MembershipRecord.model_validate(row) for row in rows]

    # ═══════════════════════════════════════════════════════════════════════════
    # CONTENT & TARGETING
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_content_items(
        self,
        collection: ContentCollection,
        approval_status: Optional[ApprovalStatus] = None,
    ) -> list[ContentItemRecord]:
        async with self._read() as session:
            rows = await ContentRepository(session).list_items(collection, approval_status)
            return [ContentItemRecord.model_validate(row) for row in rows]

    async def get_content_item(
        self,
        content_id: UUID,
        collection: Optional[ContentCollection] = None,
    ) -> Optional[ContentItemRecord]:
        async with self._read() as session:
            row = await ContentRepository(session).get_item(content_id, collection)
            return ContentItemRecord.model_validate(row) if row else None

    async def list_target_groups(
        self,
        collection: ContentCollection,
        content_id: Optional[UUID] = None,
    ) -> list[TargetGroupRecord]:
        async with self._read() as session:
            rows = await ContentRepository(session).list_target_groups(collection, content_id)
            return [TargetGroupRecord.model_validate(row) for row in rows]

    async def list_target_users(
        self,
        collection: ContentCollection,
        content_id: Optional[UUID] = None,
        user_id: Optional[UUID] = None,
    ) -> list[TargetUserRecord]:
        async with self._read() as session:
            rows = await ContentRepository(session).list_target_users(
                collection, content_id=content_id, user_id=user_id
            )
            return [TargetUserRecord.model_validate(row) for row in rows]

    # ═══════════════════════════════════════════════════════════════════════════
    # READ STATE
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_read_states(
        self,
        user_id: Optional[UUID] = None,
        collection: Optional[ContentCollection] = None,
    ) -> list[ReadStateRecord]:
        async with self._read() as session:
            rows = await ReadStateRepository(session).list_states(user_id, collection)
            return [ReadStateRecord.model_validate(row) for row in rows]

    async def upsert_read_state(
        self,
        user_id: UUID,
        content_id: UUID,
        read_at: datetime,
    ) -> ReadStateRecord:
        async with self._write() as session:
            row = await ReadStateRepository(session).upsert_read(user_id, content_id, read_at)
            return ReadStateRecord.model_validate(row)

    # ═══════════════════════════════════════════════════════════════════════════
    # AUTHORING
    # ═══════════════════════════════════════════════════════════════════════════

    async def create_content_item(
        self,
        *,
        collection: ContentCollection,
        title: str,
        body: str,
        category: Optional[str],
        targeting_type: TargetingType,
        approval_status: ApprovalStatus,
        author_id: UUID,
        group_names: Sequence[str],
        user_ids: Sequence[UUID],
    ) -> ContentItemRecord:
        async with self._write() as session:
            repo = ContentRepository(session)
            item = await repo.create(
                collection=collection,
                title=title,
                body=body,
                category=category,
                targeting_type=targeting_type,
                approval_status=approval_status,
                author_id=author_id,
            )
            await repo.replace_targeting(item.id, targeting_type, group_names, user_ids)
            return ContentItemRecord.model_validate(item)

    async def replace_targeting(
        self,
        content_id: UUID,
        targeting_type: TargetingType,
        group_names: Sequence[str],
        user_ids: Sequence[UUID],
    ) -> ContentItemRecord:
        async with self._write() as session:
            repo = ContentRepository(session)
            item = await repo.get(content_id)
            if item is None:
                raise ContentNotFoundError(str(content_id))
            item.targeting_type = targeting_type
            await repo.replace_targeting(content_id, targeting_type, group_names, user_ids)
            await session.refresh(item)
            return ContentItemRecord.model_validate(item)

    async def set_approval_status(
        self,
        content_id: UUID,
        approval_status: ApprovalStatus,
    ) -> Optional[ContentItemRecord]:
        async with self._write() as session:
            item = await ContentRepository(session).set_approval_status(content_id, approval_status)
            return ContentItemRecord.model_validate(item) if item else None

    async def delete_content_item(self, content_id: UUID) -> bool:
        async with self._write() as session:
            return await ContentRepository(session).delete_item(content_id)
