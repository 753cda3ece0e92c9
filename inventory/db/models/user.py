"""
User row - persistence shape of an inventory user.
"""

from sqlalchemy import Float, String
from sqlalchemy.orm import Mapped, mapped_column

from inventory.db.base import Base


class UserRow(Base):
    """One live inventory user. Id is the only identity; everything else is replaceable."""

    __tablename__ = "users"
    # Ids of deleted users are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    quantity: Mapped[int] = mapped_column(nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<UserRow(id={self.id}, name={self.name})>"
