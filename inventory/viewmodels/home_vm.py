"""Home view-model - exposes the list of all users for the list screen."""

from collections.abc import AsyncGenerator
from contextlib import aclosing

from inventory.config import get_settings
from inventory.core.flow import SharedState, StateFlow
from inventory.schemas.ui_state import HomeUiState
from inventory.services.users_store import UsersStore


class HomeViewModel:
    def __init__(self, store: UsersStore, *, stop_timeout_ms: int | None = None):
        self.store = store
        timeout_ms = get_settings().state_stop_timeout_ms if stop_timeout_ms is None else stop_timeout_ms
        self._ui_state = SharedState(
            self._home_states,
            HomeUiState(),
            stop_timeout=timeout_ms / 1000,
            name="home",
        )

    @property
    def ui_state(self) -> StateFlow[HomeUiState]:
        return self._ui_state

    async def _home_states(self) -> AsyncGenerator[HomeUiState, None]:
        async with aclosing(self.store.get_all_users()) as snapshots:
            async for users in snapshots:
                yield HomeUiState(user_list=users)

    async def aclose(self) -> None:
        await self._ui_state.aclose()
