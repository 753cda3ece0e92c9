"""
Details view-model - observe, update and delete one user.
Challenge: Survive short UI detach/attach cycles without re-querying the store.
Design: SharedState keeps the store subscription alive for a grace period after the last observer.
"""

from collections.abc import AsyncGenerator, Mapping
from contextlib import aclosing
from typing import Any

from inventory.config import get_settings
from inventory.core.flow import SharedState, StateFlow, first
from inventory.schemas.ui_state import UserDetailsUiState
from inventory.schemas.user import User
from inventory.services.user_mapping import to_user_details
from inventory.services.users_store import UsersStore
from inventory.viewmodels.navigation import require_user_id


class UserDetailsViewModel:
    """Retrieves, updates and deletes a single user from the store."""

    def __init__(
        self,
        store: UsersStore,
        saved_state: Mapping[str, Any],
        *,
        stop_timeout_ms: int | None = None,
        out_of_stock_threshold: int | None = None,
    ):
        settings = get_settings()
        self.store = store
        self.user_id = require_user_id(saved_state)
        self.out_of_stock_threshold = (
            settings.out_of_stock_threshold if out_of_stock_threshold is None else out_of_stock_threshold
        )
        timeout_ms = settings.state_stop_timeout_ms if stop_timeout_ms is None else stop_timeout_ms
        self._ui_state = SharedState(
            self._details_states,
            UserDetailsUiState(),
            stop_timeout=timeout_ms / 1000,
            name="user_details",
        )

    @property
    def ui_state(self) -> StateFlow[UserDetailsUiState]:
        return self._ui_state

    async def _details_states(self) -> AsyncGenerator[UserDetailsUiState, None]:
        async with aclosing(self.store.get_user_stream(self.user_id)) as users:
            async for user in users:
                if user is None:
                    continue  # Deleted: keep showing the last known state
                yield UserDetailsUiState(
                    out_of_stock=user.quantity <= self.out_of_stock_threshold,
                    user_details=to_user_details(user),
                )

    async def update_user(self, user: User) -> User:
        return await self.store.update_user(user)

    async def reduce_quantity_by_one(self) -> User | None:
        """Sell one unit. No-op (None) when nothing is in stock or the user is gone."""
        current = await first(self.store.get_user_stream(self.user_id))
        if current is None or current.quantity <= 0:
            return None
        return await self.store.update_user(current.model_copy(update={"quantity": current.quantity - 1}))

    async def delete_user(self) -> None:
        await self.store.delete_user_by_id(self.user_id)

    async def aclose(self) -> None:
        """Owning screen destroyed: drop the store subscription now."""
        await self._ui_state.aclose()
