# Repository pattern: abstract data access (SOLID - Dependency Inversion)

from inventory.db.repositories.user_repository import UserRepository

__all__ = ["UserRepository"]
