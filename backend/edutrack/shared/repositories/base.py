"""
Base Repository

Generic CRUD operations shared by every entity repository.

What This Provides:
===================
- get(id)        → Fetch single record by UUID
- list()         → List records with simple equality filters and ordering
- create()       → Create new record
- delete()       → Hard delete record

Generic Type Pattern:
=====================
    class UserRepository(BaseRepository[User]):
        ...

    repo = UserRepository(session)
    user = await repo.get(user_id)  # typed as Optional[User]

flush() vs commit():
====================
Repository methods only flush. The caller owns the transaction and commits
(or rolls back) once the whole unit of work is done, so multi-table writes
such as "replace an item's targeting rows" stay atomic.
"""

from typing import Any, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from edutrack.shared.models.base import Base


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameter:
        ModelType: The SQLAlchemy model class this repository manages

    Attributes:
        model: The SQLAlchemy model class
        session: The async database session
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        """
        Initialize the repository.

        Args:
            model: SQLAlchemy model class (e.g., User, ContentItem)
            session: Async database session
        """
        self.model = model
        self.session = session

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: UUID) -> Optional[ModelType]:
        """
        Get a single record by its UUID.

        SQL Generated:
            SELECT * FROM <table> WHERE id = '550e8400-...'
        """
        result = await self.session.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def list(
        self,
        *,
        filters: Optional[dict[str, Any]] = None,
        order_by: Optional[str] = None,
        order_desc: bool = True,
    ) -> list[ModelType]:
        """
        List records with optional equality filters and ordering.

        Unknown filter or order fields are ignored.

        Example:
            managers = await repo.list(filters={"role": UserRole.MANAGER}, order_by="username",
                                       order_desc=False)
        """
        query = select(self.model)

        if filters:
            for field, value in filters.items():
                if hasattr(self.model, field):
                    query = query.where(getattr(self.model, field) == value)

        if order_by and hasattr(self.model, order_by):
            order_field = getattr(self.model, order_by)
            query = query.order_by(order_field.desc() if order_desc else order_field)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Create a new record and flush it to obtain DB-generated values.

        SQL Generated:
            INSERT INTO <table> (...) VALUES (...) RETURNING id, created_at, ...
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, record_id: UUID) -> bool:
        """
        Hard delete a record by ID.

        Returns:
            True if deleted, False if not found
        """
        instance = await self.get(record_id)
        if not instance:
            return False

        await self.session.delete(instance)
        await self.session.flush()
        return True
