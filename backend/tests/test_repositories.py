"""
Tests for the SQL layer without a database: statements are captured from a
stub session and compiled with the PostgreSQL dialect.
"""

from types import SimpleNamespace
from uuid import uuid4

import pytest
from sqlalchemy.dialects import postgresql

from edutrack.shared.models import (
    ContentCollection,
    ContentItem,
    ContentTargetGroup,
    ContentTargetUser,
    ReadState,
    TargetingType,
)
from edutrack.shared.repositories.content_repository import ContentRepository
from edutrack.shared.repositories.data_source import SqlContentDataSource
from edutrack.shared.repositories.read_state_repository import ReadStateRepository
from edutrack.shared.schemas.entities import ReadStateRecord
from tests.conftest import BASE_TIME


class RecordingSession:
    """AsyncSession stand-in that records statements and returns `rows`."""

    def __init__(self, rows=()):
        self.rows = list(rows)
        self.statements = []
        self.added = []
        self.deleted = []
        self.flushes = 0
        self.closed = False

    async def execute(self, statement, execution_options=None):
        self.statements.append(statement)
        rows = self.rows
        return SimpleNamespace(
            scalar_one=lambda: rows[0],
            scalar_one_or_none=lambda: rows[0] if rows else None,
            scalars=lambda: SimpleNamespace(all=lambda: rows),
        )

    def add_all(self, instances):
        self.added.extend(instances)

    async def delete(self, instance):
        self.deleted.append(instance)

    async def flush(self):
        self.flushes += 1

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.closed = True


def compiled(statement) -> str:
    return str(statement.compile(dialect=postgresql.dialect()))


@pytest.mark.asyncio
async def test_upsert_targets_the_read_state_constraint():
    user_id, content_id = uuid4(), uuid4()
    row = ReadState(id=uuid4(), user_id=user_id, content_id=content_id, is_read=True)
    session = RecordingSession([row])

    result = await ReadStateRepository(session).upsert_read(user_id, content_id, BASE_TIME)

    assert result is row
    sql = compiled(session.statements[0])
    assert "INSERT INTO read_states" in sql
    assert "ON CONFLICT (user_id, content_id) DO UPDATE" in sql
    assert "RETURNING" in sql


@pytest.mark.asyncio
async def test_list_states_joins_items_for_collection_filter():
    session = RecordingSession()

    await ReadStateRepository(session).list_states(uuid4(), ContentCollection.BEST_PRACTICE)

    sql = compiled(session.statements[0])
    assert "JOIN content_items" in sql
    assert "content_items.collection" in sql
    assert "read_states.user_id" in sql


@pytest.mark.asyncio
async def test_data_source_opens_a_session_per_fetch():
    user_id, content_id = uuid4(), uuid4()
    row = ReadState(
        id=uuid4(), user_id=user_id, content_id=content_id, is_read=True, read_at=BASE_TIME
    )
    sessions = []

    def session_factory():
        session = RecordingSession([row])
        sessions.append(session)
        return session

    source = SqlContentDataSource(session_factory)

    first = await source.get_read_states(user_id)
    await source.get_read_states(user_id)

    assert first == [
        ReadStateRecord(user_id=user_id, content_id=content_id, is_read=True, read_at=BASE_TIME)
    ]
    assert len(sessions) == 2
    assert all(session.closed for session in sessions)


@pytest.mark.asyncio
async def test_replace_targeting_clears_both_kinds_then_inserts_groups():
    content_id = uuid4()
    session = RecordingSession()

    await ContentRepository(session).replace_targeting(
        content_id, TargetingType.GROUP, group_names=["A", "B", "A"], user_ids=[uuid4()]
    )

    deletes = [compiled(statement) for statement in session.statements]
    assert deletes[0].startswith("DELETE FROM content_target_groups")
    assert deletes[1].startswith("DELETE FROM content_target_users")
    assert all("content_id" in sql for sql in deletes)
    assert [type(row) for row in session.added] == [ContentTargetGroup, ContentTargetGroup]
    assert [row.group_name for row in session.added] == ["A", "B"]
    assert session.flushes == 1


@pytest.mark.asyncio
async def test_replace_targeting_inserts_only_user_rows_for_individual():
    content_id, user_id = uuid4(), uuid4()
    session = RecordingSession()

    await ContentRepository(session).replace_targeting(
        content_id, TargetingType.INDIVIDUAL, group_names=["A"], user_ids=[user_id]
    )

    assert len(session.statements) == 2
    assert all(isinstance(row, ContentTargetUser) for row in session.added)
    assert [(row.content_id, row.user_id) for row in session.added] == [(content_id, user_id)]


@pytest.mark.asyncio
async def test_delete_item_removes_target_rows_and_read_states():
    item = ContentItem(
        id=uuid4(),
        collection=ContentCollection.EDUCATION,
        title="intro",
        body="body",
        targeting_type=TargetingType.GROUP,
    )
    session = RecordingSession([item])

    deleted = await ContentRepository(session).delete_item(item.id)

    assert deleted is True
    child_deletes = [compiled(statement) for statement in session.statements[:3]]
    assert child_deletes[0].startswith("DELETE FROM content_target_groups")
    assert child_deletes[1].startswith("DELETE FROM content_target_users")
    assert child_deletes[2].startswith("DELETE FROM read_states")
    assert session.deleted == [item]


@pytest.mark.asyncio
async def test_delete_missing_item_reports_false():
    session = RecordingSession()

    deleted = await ContentRepository(session).delete_item(uuid4())

    assert deleted is False
    assert session.deleted == []
