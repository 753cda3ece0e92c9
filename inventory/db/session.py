"""
Async database session management.
Challenge: Short units of work, proper cleanup, rollback on failure.
Design: The store opens one session per operation (no connection leaks, no shared session state).
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from inventory.config import get_settings
from inventory.db.base import Base


def build_engine(database_url: str | None = None) -> AsyncEngine:
    """Async engine for the configured (or given) database URL."""
    settings = get_settings()
    return create_async_engine(
        database_url or settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,  # Verify connections before use
    )


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory: one session per store operation."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_models(engine: AsyncEngine) -> None:
    """Create missing tables. Migrations (Alembic) remain the source of truth for upgrades."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def session_scope(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session for one unit of work. Commits on success, rolls back on error, always closes."""
    async with session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
