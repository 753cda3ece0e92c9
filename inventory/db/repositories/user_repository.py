"""
User repository - encapsulates all user data access (SOLID: Single Responsibility).
Challenge: Keep queries in one place for optimization and reuse.
"""

from inventory.db.models.user import UserRow
from inventory.db.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[UserRow]):
    """User-specific writes. Extends base CRUD with full-record replacement."""

    def __init__(self, session):
        super().__init__(session, UserRow)

    async def replace(self, id: int, *, name: str, price: float, quantity: int) -> UserRow | None:
        """Overwrite every field of an existing row. None when the id is not live."""
        row = await self.get_by_id(id)
        if row is None:
            return None
        row.name = name
        row.price = price
        row.quantity = quantity
        await self.session.flush()
        await self.session.refresh(row)
        return row
