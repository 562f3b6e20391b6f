"""
Read-State Tracker

Records and queries per-(user, content item) acknowledgments.

State Machine:
==============
    unread (no row) ──mark_read──► read ──mark_read──► read (read_at refreshed)

There is no transition back to unread and no API that writes
is_read = False. A missing row means unread; get_read_map never invents
placeholder rows.

Usage:
======
    tracker = ReadStateTracker(source)
    await tracker.mark_read(user_id, content_id)
    marks = await tracker.get_read_map(user_id, [content_id])
    marks.get(content_id, UNREAD).is_read
"""

from datetime import datetime, timezone
from typing import Callable, Iterable, Optional
from uuid import UUID

from edutrack.shared.core.logging import get_logger
from edutrack.shared.models.enums import ContentCollection
from edutrack.shared.models.read_state import READ_STATE_CONFLICT_KEY
from edutrack.shared.repositories.data_source import AudienceDataSource
from edutrack.shared.schemas.entities import ReadMark, ReadStateRecord


logger = get_logger("read_state")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_read_map(
    rows: Iterable[ReadStateRecord],
    content_ids: Optional[Iterable[UUID]] = None,
) -> dict[UUID, ReadMark]:
    """
    Index read-state rows of ONE user by content id.

    Args:
        rows: Read-state rows of the user
        content_ids: Keep only these ids (all rows when None)

    Returns:
        content id → ReadMark, containing stored rows only
    """
    wanted = set(content_ids) if content_ids is not None else None
    return {
        row.content_id: ReadMark(is_read=row.is_read, read_at=row.read_at)
        for row in rows
        if wanted is None or row.content_id in wanted
    }


class ReadStateTracker:
    """
    Read-state operations over an AudienceDataSource.

    The upsert conflict key is READ_STATE_CONFLICT_KEY, i.e.
    ("user_id", "content_id"); calling mark_read N times leaves one row
    with is_read=True and read_at from the latest call.
    """

    conflict_key = READ_STATE_CONFLICT_KEY

    def __init__(
        self,
        source: AudienceDataSource,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Args:
            source: Repository boundary providing get_read_states/upsert_read_state
            clock: Source of acknowledgment timestamps
        """
        self.source = source
        self.clock = clock

    async def mark_read(self, user_id: UUID, content_id: UUID) -> ReadStateRecord:
        """
        Acknowledge `content_id` for `user_id`.

        Errors from the store propagate; callers that need best-effort
        semantics (page views) wrap this call.
        """
        record = await self.source.upsert_read_state(user_id, content_id, self.clock())
        logger.debug("Read state upserted", user_id=str(user_id), content_id=str(content_id))
        return record

    async def get_read_map(
        self,
        user_id: UUID,
        content_ids: Optional[Iterable[UUID]] = None,
        collection: Optional[ContentCollection] = None,
    ) -> dict[UUID, ReadMark]:
        """
        Stored read marks of `user_id`.

        Args:
            user_id: Reader
            content_ids: Restrict to these items
            collection: Restrict to one collection

        Returns:
            content id → ReadMark; absent ids are unread
        """
        rows = await self.source.get_read_states(user_id=user_id, collection=collection)
        return build_read_map(rows, content_ids)
