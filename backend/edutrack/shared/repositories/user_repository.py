"""
User & Group Repositories

Read access to staff accounts, groups and memberships.

Common Operations:
==================
- UserRepository.list_users()          → All users, optionally by role
- GroupRepository.list_groups()        → All groups ordered by name
- GroupRepository.list_memberships()   → Membership edges, optionally for one user
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from edutrack.shared.models.enums import UserRole
from edutrack.shared.models.group import Group
from edutrack.shared.models.user import User
from edutrack.shared.models.user_group import UserGroup
from edutrack.shared.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User entity."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    async def list_users(self, role: Optional[UserRole] = None) -> List[User]:
        """
        List users ordered by username.

        Args:
            role: Only return users with this role

        Returns:
            List of User
        """
        filters = {"role": role} if role else None
        return await self.list(filters=filters, order_by="username", order_desc=False)


class GroupRepository(BaseRepository[Group]):
    """Repository for Group entity and its membership edges."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Group, session)

    async def list_groups(self) -> List[Group]:
        return await self.list(order_by="name", order_desc=False)

    async def list_memberships(self, user_id: Optional[UUID] = None) -> List[UserGroup]:
        """
        List membership edges.

        Args:
            user_id: Restrict to one user's memberships

        SQL Generated:
            SELECT * FROM user_groups [WHERE user_id = '...']
        """
        query = select(UserGroup)
        if user_id is not None:
            query = query.where(UserGroup.user_id == user_id)

        result = await self.session.execute(query)
        return list(result.scalars().all())
