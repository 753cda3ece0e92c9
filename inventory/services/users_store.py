"""
Users store - CRUD over inventory users with reactive read streams.
Challenge: Readers see every committed change without polling.
Design: Each commit bumps a change counter; streams re-query on every bump and skip repeats.
Id policy: id 0 asks the store to assign one; any other id is caller-supplied and must be free.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import aclosing
from typing import TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from inventory.core.errors import ConstraintViolationError, UserNotFoundError
from inventory.core.flow import MutableStateFlow
from inventory.core.metrics import STORE_MUTATIONS
from inventory.db.models.user import UserRow
from inventory.db.repositories.user_repository import UserRepository
from inventory.db.session import build_engine, build_session_maker, init_models, session_scope
from inventory.schemas.user import User

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNSET = object()


class UsersStore(ABC):
    """Persistence contract consumed by the view-models."""

    @abstractmethod
    def get_all_users(self) -> AsyncGenerator[list[User], None]:
        """All live users, emitted on subscribe and after every change to the set."""

    @abstractmethod
    def get_user_stream(self, id: int) -> AsyncGenerator[User | None, None]:
        """One user (None when absent), emitted on subscribe and after every change to it."""

    @abstractmethod
    async def insert_user(self, user: User) -> User:
        """Store a new user and return it with its final id."""

    @abstractmethod
    async def update_user(self, user: User) -> User:
        """Replace every field of an existing user."""

    @abstractmethod
    async def delete_user(self, user: User) -> None:
        """Remove the user with ``user.id``. Absent users are ignored."""

    @abstractmethod
    async def delete_user_by_id(self, id: int) -> None:
        """Remove a user by id. Absent users are ignored."""


class OfflineUsersStore(UsersStore):
    """UsersStore on the local SQL database. One session per operation."""

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        *,
        engine: AsyncEngine | None = None,
    ):
        self._session_maker = session_maker
        self._engine = engine
        self._changes = MutableStateFlow(0)

    async def aclose(self) -> None:
        """Dispose the engine when this store created it."""
        if self._engine is not None:
            await self._engine.dispose()

    # --- Streams ---

    def get_all_users(self) -> AsyncGenerator[list[User], None]:
        return self._watch(self._load_all)

    def get_user_stream(self, id: int) -> AsyncGenerator[User | None, None]:
        return self._watch(lambda: self._load_one(id))

    async def _watch(self, load: Callable[[], Awaitable[T]]) -> AsyncGenerator[T, None]:
        """Re-run ``load`` after every committed change; emit only when the result differs."""
        previous: object = _UNSET
        async with aclosing(self._changes.subscribe()) as changes:
            async for _ in changes:
                current = await load()
                if current != previous:
                    previous = current
                    yield current

    async def _load_all(self) -> list[User]:
        async with session_scope(self._session_maker) as session:
            rows = await UserRepository(session).get_all()
            return [User.model_validate(row) for row in rows]

    async def _load_one(self, id: int) -> User | None:
        async with session_scope(self._session_maker) as session:
            row = await UserRepository(session).get_by_id(id)
            return User.model_validate(row) if row is not None else None

    # --- Mutations (commit first, then notify) ---

    async def insert_user(self, user: User) -> User:
        try:
            async with session_scope(self._session_maker) as session:
                repo = UserRepository(session)
                if user.id != 0 and await repo.get_by_id(user.id) is not None:
                    raise ConstraintViolationError(user.id)
                row = await repo.add(
                    UserRow(
                        id=user.id or None,
                        name=user.name,
                        price=user.price,
                        quantity=user.quantity,
                    )
                )
                stored = User.model_validate(row)
        except IntegrityError as exc:
            # Concurrent insert won the id between our check and the flush
            raise ConstraintViolationError(user.id) from exc
        self._notify("insert")
        logger.debug("insert_user: stored id=%s", stored.id)
        return stored

    async def update_user(self, user: User) -> User:
        async with session_scope(self._session_maker) as session:
            row = await UserRepository(session).replace(
                user.id,
                name=user.name,
                price=user.price,
                quantity=user.quantity,
            )
            if row is None:
                raise UserNotFoundError(user.id)
            stored = User.model_validate(row)
        self._notify("update")
        logger.debug("update_user: id=%s", stored.id)
        return stored

    async def delete_user(self, user: User) -> None:
        await self.delete_user_by_id(user.id)

    async def delete_user_by_id(self, id: int) -> None:
        async with session_scope(self._session_maker) as session:
            removed = await UserRepository(session).delete_by_id(id)
        if removed:
            self._notify("delete")
            logger.debug("delete_user_by_id: removed id=%s", id)
        else:
            logger.debug("delete_user_by_id: id=%s not found, nothing to do", id)

    def _notify(self, operation: str) -> None:
        STORE_MUTATIONS.labels(operation=operation).inc()
        self._changes.value = self._changes.value + 1


async def create_offline_users_store(database_url: str | None = None) -> OfflineUsersStore:
    """Build engine, ensure the schema exists and return a store that owns the engine."""
    engine = build_engine(database_url)
    await init_models(engine)
    return OfflineUsersStore(build_session_maker(engine), engine=engine)
