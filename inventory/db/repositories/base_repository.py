"""
Base repository - generic CRUD interface (SOLID: Interface Segregation, Dependency Inversion).
Challenge: Consistent data access, testability, query shape in one place.
"""

from typing import Generic, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Generic async repository. Subclasses define model-specific methods."""

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    async def get_by_id(self, id: int) -> ModelType | None:
        """Fetch single entity by primary key."""
        result = await self.session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def get_all(self) -> list[ModelType]:
        """Every row ordered by id. Snapshots are small; no paging."""
        result = await self.session.execute(select(self.model).order_by(self.model.id))
        return list(result.scalars().all())

    async def add(self, entity: ModelType) -> ModelType:
        """Persist new entity. Caller commits session."""
        self.session.add(entity)
        await self.session.flush()  # Get ID without committing
        await self.session.refresh(entity)
        return entity

    async def delete_by_id(self, id: int) -> bool:
        """Remove entity by primary key. Returns False when nothing matched."""
        result = await self.session.execute(delete(self.model).where(self.model.id == id))
        return result.rowcount > 0
