"""
Test configuration and fixtures.

Provides:
- FakeDataSource: in-memory AudienceDataSource + ContentStore
- Service fixtures wired to the fake
- JWT minting and an HTTPX AsyncClient over the ASGI app, with the data
  source dependency overridden (no database needed)
"""

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Iterable, Optional, Sequence
from uuid import UUID, uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from edutrack.api.dependencies.services import get_data_source
from edutrack.api.main import create_application
from edutrack.config.settings import settings
from edutrack.shared.core.exceptions import ContentNotFoundError
from edutrack.shared.models.enums import (
    ApprovalStatus,
    ContentCollection,
    TargetingType,
    UserRole,
)
from edutrack.shared.schemas.entities import (
    ContentItemRecord,
    GroupRecord,
    MembershipRecord,
    ReadStateRecord,
    TargetGroupRecord,
    TargetUserRecord,
    UserRecord,
)
from edutrack.shared.services.audience_service import AudienceService
from edutrack.shared.services.authoring_service import ContentAuthoringService
from edutrack.shared.utils.security import SecurityUtils


BASE_TIME = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


class SourceUnavailable(RuntimeError):
    """Raised by FakeDataSource for methods listed in `failing`."""


# =============================================================================
# In-memory data source
# =============================================================================


class FakeDataSource:
    """
    In-memory stand-in for SqlContentDataSource.

    Items are listed newest first like the SQL implementation. Names in
    `failing` make the matching method raise; `upsert_failures` makes the
    next N upserts raise; `upsert_error`, when set, is raised by every upsert.
    """

    def __init__(self) -> None:
        self.users: dict[UUID, UserRecord] = {}
        self.groups: dict[str, GroupRecord] = {}
        self.memberships: list[MembershipRecord] = []
        self.items: dict[UUID, ContentItemRecord] = {}
        self.target_groups: list[TargetGroupRecord] = []
        self.target_users: list[TargetUserRecord] = []
        self.read_states: dict[tuple[UUID, UUID], ReadStateRecord] = {}
        self.failing: set[str] = set()
        self.upsert_failures = 0
        self.upsert_error: Optional[Exception] = None
        self.upsert_calls = 0
        self._clock = BASE_TIME

    def _check(self, name: str) -> None:
        if name in self.failing:
            raise SourceUnavailable(name)

    def _tick(self) -> datetime:
        self._clock += timedelta(minutes=1)
        return self._clock

    # ── seeding helpers ──────────────────────────────────────────────────────

    def add_group(self, name: str) -> GroupRecord:
        if name not in self.groups:
            self.groups[name] = GroupRecord(id=uuid4(), name=name)
        return self.groups[name]

    def add_user(
        self,
        username: str,
        role: UserRole = UserRole.MANAGER,
        groups: Iterable[str] = (),
        nickname: Optional[str] = None,
    ) -> UserRecord:
        user = UserRecord(id=uuid4(), role=role, username=username, nickname=nickname)
        self.users[user.id] = user
        for name in groups:
            group = self.add_group(name)
            self.memberships.append(MembershipRecord(user_id=user.id, group_id=group.id))
        return user

    def add_item(
        self,
        title: str,
        *,
        body: Optional[str] = None,
        collection: ContentCollection = ContentCollection.EDUCATION,
        targeting_type: TargetingType = TargetingType.GROUP,
        groups: Sequence[str] = (),
        users: Sequence[UUID] = (),
        category: Optional[str] = None,
        approval_status: ApprovalStatus = ApprovalStatus.APPROVED,
        author_id: Optional[UUID] = None,
    ) -> ContentItemRecord:
        item = ContentItemRecord(
            id=uuid4(),
            collection=collection,
            title=title,
            body=body if body is not None else f"{title} body",
            category=category,
            targeting_type=targeting_type,
            approval_status=approval_status,
            author_id=author_id,
            created_at=self._tick(),
        )
        self.items[item.id] = item
        self._write_targets(item.id, groups, users)
        return item

    def _write_targets(
        self,
        content_id: UUID,
        group_names: Sequence[str],
        user_ids: Sequence[UUID],
    ) -> None:
        self.target_groups = [r for r in self.target_groups if r.content_id != content_id]
        self.target_users = [r for r in self.target_users if r.content_id != content_id]
        self.target_groups += [
            TargetGroupRecord(content_id=content_id, group_name=name) for name in group_names
        ]
        self.target_users += [
            TargetUserRecord(content_id=content_id, user_id=user_id) for user_id in user_ids
        ]

    def _in_collection(self, content_id: UUID, collection: Optional[ContentCollection]) -> bool:
        item = self.items.get(content_id)
        return item is not None and (collection is None or item.collection == collection)

    # ── AudienceDataSource ───────────────────────────────────────────────────

    async def list_users(self, role: Optional[UserRole] = None) -> list[UserRecord]:
        self._check("list_users")
        return [u for u in self.users.values() if role is None or u.role == role]

    async def get_user(self, user_id: UUID) -> Optional[UserRecord]:
        self._check("get_user")
        return self.users.get(user_id)

    async def list_groups(self) -> list[GroupRecord]:
        self._check("list_groups")
        return list(self.groups.values())

    async def list_memberships(self, user_id: Optional[UUID] = None) -> list[MembershipRecord]:
        self._check("list_memberships")
        return [m for m in self.memberships if user_id is None or m.user_id == user_id]

    async def list_content_items(
        self,
        collection: ContentCollection,
        approval_status: Optional[ApprovalStatus] = None,
    ) -> list[ContentItemRecord]:
        self._check("list_content_items")
        items = [
            item
            for item in self.items.values()
            if item.collection == collection
            and (approval_status is None or item.approval_status == approval_status)
        ]
        return sorted(items, key=lambda item: item.created_at, reverse=True)

    async def get_content_item(
        self,
        content_id: UUID,
        collection: Optional[ContentCollection] = None,
    ) -> Optional[ContentItemRecord]:
        self._check("get_content_item")
        if not self._in_collection(content_id, collection):
            return None
        return self.items[content_id]

    async def list_target_groups(
        self,
        collection: ContentCollection,
        content_id: Optional[UUID] = None,
    ) -> list[TargetGroupRecord]:
        self._check("list_target_groups")
        return [
            row
            for row in self.target_groups
            if self._in_collection(row.content_id, collection)
            and (content_id is None or row.content_id == content_id)
        ]

    async def list_target_users(
        self,
        collection: ContentCollection,
        content_id: Optional[UUID] = None,
        user_id: Optional[UUID] = None,
    ) -> list[TargetUserRecord]:
        self._check("list_target_users")
        return [
            row
            for row in self.target_users
            if self._in_collection(row.content_id, collection)
            and (content_id is None or row.content_id == content_id)
            and (user_id is None or row.user_id == user_id)
        ]

    async def get_read_states(
        self,
        user_id: Optional[UUID] = None,
        collection: Optional[ContentCollection] = None,
    ) -> list[ReadStateRecord]:
        self._check("get_read_states")
        return [
            row
            for row in self.read_states.values()
            if (user_id is None or row.user_id == user_id)
            and self._in_collection(row.content_id, collection)
        ]

    async def upsert_read_state(
        self,
        user_id: UUID,
        content_id: UUID,
        read_at: datetime,
    ) -> ReadStateRecord:
        self.upsert_calls += 1
        self._check("upsert_read_state")
        if self.upsert_error is not None:
            raise self.upsert_error
        if self.upsert_failures > 0:
            self.upsert_failures -= 1
            raise SourceUnavailable("upsert_read_state")

        row = ReadStateRecord(user_id=user_id, content_id=content_id, is_read=True, read_at=read_at)
        self.read_states[(user_id, content_id)] = row
        return row

    # ── ContentStore ─────────────────────────────────────────────────────────

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
        item = self.add_item(
            title,
            body=body,
            collection=collection,
            targeting_type=targeting_type,
            groups=group_names if targeting_type == TargetingType.GROUP else (),
            users=user_ids if targeting_type == TargetingType.INDIVIDUAL else (),
            category=category,
            approval_status=approval_status,
            author_id=author_id,
        )
        return item

    async def replace_targeting(
        self,
        content_id: UUID,
        targeting_type: TargetingType,
        group_names: Sequence[str],
        user_ids: Sequence[UUID],
    ) -> ContentItemRecord:
        if content_id not in self.items:
            raise ContentNotFoundError(str(content_id))
        item = self.items[content_id].model_copy(update={"targeting_type": targeting_type})
        self.items[content_id] = item
        self._write_targets(
            content_id,
            group_names if targeting_type == TargetingType.GROUP else (),
            user_ids if targeting_type == TargetingType.INDIVIDUAL else (),
        )
        return item

    async def set_approval_status(
        self,
        content_id: UUID,
        approval_status: ApprovalStatus,
    ) -> Optional[ContentItemRecord]:
        if content_id not in self.items:
            return None
        item = self.items[content_id].model_copy(update={"approval_status": approval_status})
        self.items[content_id] = item
        return item

    async def delete_content_item(self, content_id: UUID) -> bool:
        if self.items.pop(content_id, None) is None:
            return False
        self._write_targets(content_id, (), ())
        self.read_states = {
            key: row for key, row in self.read_states.items() if row.content_id != content_id
        }
        return True


# =============================================================================
# Service fixtures
# =============================================================================


@pytest.fixture
def source() -> FakeDataSource:
    return FakeDataSource()


@pytest.fixture
def audience_service(source: FakeDataSource) -> AudienceService:
    return AudienceService(source, read_state_write_attempts=3, read_state_retry_delay=0)


@pytest.fixture
def authoring_service(source: FakeDataSource) -> ContentAuthoringService:
    return ContentAuthoringService(source, allow_manager_authoring=True)


@pytest.fixture
def admin(source: FakeDataSource) -> UserRecord:
    return source.add_user("admin", role=UserRole.ADMIN)


@pytest.fixture
def manager(source: FakeDataSource) -> UserRecord:
    return source.add_user("kim", groups=["A"], nickname="김매니저")


# =============================================================================
# HTTP fixtures
# =============================================================================


def auth_headers(user: UserRecord) -> dict[str, str]:
    """Authorization header carrying a token for `user`."""
    token = SecurityUtils.create_access_token(
        user_id=user.id,
        role=user.role,
        secret_key=settings.SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def app(source: FakeDataSource):
    app = create_application(use_lifespan=False)
    app.dependency_overrides[get_data_source] = lambda: source
    return app


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
