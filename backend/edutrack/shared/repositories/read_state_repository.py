"""
ReadState Repository

Read-state rows and the single upsert that acknowledges an item.

The upsert is one atomic statement keyed on READ_STATE_CONFLICT_KEY:

    INSERT INTO read_states (id, user_id, content_id, is_read, read_at)
    VALUES (...)
    ON CONFLICT (user_id, content_id)
    DO UPDATE SET is_read = true, read_at = EXCLUDED.read_at
    RETURNING *

Concurrent duplicates for the same pair are absorbed by the constraint;
the last writer's read_at wins.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from edutrack.shared.models.content_item import ContentItem
from edutrack.shared.models.enums import ContentCollection
from edutrack.shared.models.read_state import READ_STATE_CONFLICT_KEY, ReadState
from edutrack.shared.repositories.base import BaseRepository


class ReadStateRepository(BaseRepository[ReadState]):
    """Repository for ReadState entity."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(ReadState, session)

    async def list_states(
        self,
        user_id: Optional[UUID] = None,
        collection: Optional[ContentCollection] = None,
    ) -> List[ReadState]:
        """
        List read-state rows.

        Args:
            user_id: Only this user's rows
            collection: Only rows of items in this collection
        """
        query = select(ReadState)
        if collection is not None:
            query = query.join(ContentItem, ContentItem.id == ReadState.content_id).where(
                ContentItem.collection == collection
            )
        if user_id is not None:
            query = query.where(ReadState.user_id == user_id)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def upsert_read(
        self,
        user_id: UUID,
        content_id: UUID,
        read_at: datetime,
    ) -> ReadState:
        """
        Mark (user_id, content_id) as read at `read_at`.

        Creates the row on first acknowledgment; afterwards only refreshes
        read_at. is_read is always written as True.
        """
        statement = (
            pg_insert(ReadState)
            .values(
                id=uuid4(),
                user_id=user_id,
                content_id=content_id,
                is_read=True,
                read_at=read_at,
            )
            .on_conflict_do_update(
                index_elements=list(READ_STATE_CONFLICT_KEY),
                set_={"is_read": True, "read_at": read_at},
            )
            .returning(ReadState)
        )

        result = await self.session.execute(
            statement,
            execution_options={"populate_existing": True},
        )
        return result.scalar_one()
