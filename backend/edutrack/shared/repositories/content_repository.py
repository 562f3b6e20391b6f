"""
Content Repository

Database operations for content items and their targeting rows.

Common Operations:
==================
- list_items()           → Items of one collection, newest first
- get_item()             → One item, optionally checked against a collection
- list_target_groups()   → Group-name rows of a collection
- list_target_users()    → User rows of a collection
- replace_targeting()    → Delete-then-insert of an item's target rows
- delete_item()          → Item plus target rows and read states
"""

from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from edutrack.shared.models.content_item import ContentItem
from edutrack.shared.models.content_target import ContentTargetGroup, ContentTargetUser
from edutrack.shared.models.enums import ApprovalStatus, ContentCollection, TargetingType
from edutrack.shared.models.read_state import ReadState
from edutrack.shared.repositories.base import BaseRepository


class ContentRepository(BaseRepository[ContentItem]):
    """
    Repository for ContentItem and its targeting rows.

    Target rows are only ever written through `replace_targeting`, which
    removes both kinds of rows before inserting the ones matching the
    item's targeting type, so an item never carries rows of the other type.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(ContentItem, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_items(
        self,
        collection: ContentCollection,
        approval_status: Optional[ApprovalStatus] = None,
    ) -> List[ContentItem]:
        """
        List items of a collection, newest first.

        Args:
            collection: education or best_practice
            approval_status: Only items in this status

        SQL Generated:
            SELECT * FROM content_items
            WHERE collection = 'education' [AND approval_status = 'pending']
            ORDER BY created_at DESC, id
        """
        query = select(ContentItem).where(ContentItem.collection == collection)
        if approval_status is not None:
            query = query.where(ContentItem.approval_status == approval_status)
        query = query.order_by(ContentItem.created_at.desc(), ContentItem.id)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_item(
        self,
        content_id: UUID,
        collection: Optional[ContentCollection] = None,
    ) -> Optional[ContentItem]:
        """Get one item; None when missing or in another collection."""
        item = await self.get(content_id)
        if item is None or (collection is not None and item.collection != collection):
            return None
        return item

    async def list_target_groups(
        self,
        collection: ContentCollection,
        content_id: Optional[UUID] = None,
    ) -> List[ContentTargetGroup]:
        """
        List group-name target rows of a collection.

        SQL Generated:
            SELECT g.* FROM content_target_groups g
            JOIN content_items i ON i.id = g.content_id
            WHERE i.collection = '...' [AND g.content_id = '...']
        """
        query = (
            select(ContentTargetGroup)
            .join(ContentItem, ContentItem.id == ContentTargetGroup.content_id)
            .where(ContentItem.collection == collection)
        )
        if content_id is not None:
            query = query.where(ContentTargetGroup.content_id == content_id)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_target_users(
        self,
        collection: ContentCollection,
        content_id: Optional[UUID] = None,
        user_id: Optional[UUID] = None,
    ) -> List[ContentTargetUser]:
        """
        List user target rows of a collection.

        Args:
            collection: education or best_practice
            content_id: Restrict to one item
            user_id: Restrict to rows naming one user (listing for that user)
        """
        query = (
            select(ContentTargetUser)
            .join(ContentItem, ContentItem.id == ContentTargetUser.content_id)
            .where(ContentItem.collection == collection)
        )
        if content_id is not None:
            query = query.where(ContentTargetUser.content_id == content_id)
        if user_id is not None:
            query = query.where(ContentTargetUser.user_id == user_id)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def replace_targeting(
        self,
        content_id: UUID,
        targeting_type: TargetingType,
        group_names: Iterable[str] = (),
        user_ids: Iterable[UUID] = (),
    ) -> None:
        """
        Replace all target rows of an item (delete-then-insert).

        Only rows matching `targeting_type` are inserted; the other list is
        ignored.

        SQL Generated:
            DELETE FROM content_target_groups WHERE content_id = '...'
            DELETE FROM content_target_users WHERE content_id = '...'
            INSERT INTO content_target_groups|content_target_users ...
        """
        await self.session.execute(
            delete(ContentTargetGroup).where(ContentTargetGroup.content_id == content_id)
        )
        await self.session.execute(
            delete(ContentTargetUser).where(ContentTargetUser.content_id == content_id)
        )

        if targeting_type == TargetingType.GROUP:
            self.session.add_all(
                ContentTargetGroup(content_id=content_id, group_name=name)
                for name in dict.fromkeys(group_names)
            )
        else:
            self.session.add_all(
                ContentTargetUser(content_id=content_id, user_id=user_id)
                for user_id in dict.fromkeys(user_ids)
            )

        await self.session.flush()

    async def set_approval_status(
        self,
        content_id: UUID,
        approval_status: ApprovalStatus,
    ) -> Optional[ContentItem]:
        item = await self.get(content_id)
        if item is None:
            return None

        item.approval_status = approval_status
        await self.session.flush()
        await self.session.refresh(item)
        return item

    async def delete_item(self, content_id: UUID) -> bool:
        """
        Delete an item together with its target rows and read states.

        The child deletes are explicit so that counts stay correct even on
        a store without ON DELETE CASCADE.

        Returns:
            True if the item existed
        """
        for model in (ContentTargetGroup, ContentTargetUser, ReadState):
            await self.session.execute(delete(model).where(model.content_id == content_id))

        return await self.delete(content_id)
