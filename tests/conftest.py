"""
Pytest fixtures - isolated database and store per test (TDD/BDD support).
Challenge: Isolated tests; every test gets its own SQLite file, no shared state.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio

from inventory.config import get_settings
from inventory.services.users_store import OfflineUsersStore, create_offline_users_store


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached; tests that touch the environment must not leak into others."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest_asyncio.fixture
async def store(database_url: str) -> AsyncGenerator[OfflineUsersStore, None]:
    store = await create_offline_users_store(database_url)
    yield store
    await store.aclose()
