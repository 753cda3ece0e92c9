"""
Entry and edit view-models - hold the unsaved draft, validate it, save it.
Design: The draft is replaced wholesale on every edit (no field-level mutators).
"""

import logging
from collections.abc import Mapping
from typing import Any

from inventory.core.errors import UserNotFoundError
from inventory.core.flow import MutableStateFlow, StateFlow, first
from inventory.schemas.ui_state import UserUiState
from inventory.schemas.user import User, UserDetails
from inventory.services.user_mapping import to_user, to_user_ui_state
from inventory.services.users_store import UsersStore
from inventory.viewmodels.navigation import require_user_id

logger = logging.getLogger(__name__)


def validate_input(details: UserDetails) -> bool:
    """Every field filled in. Numeric format is not checked here (see to_user)."""
    return bool(details.name.strip() and details.price.strip() and details.quantity.strip())


class UserEntryViewModel:
    """Validates and inserts (or updates) users through the store."""

    def __init__(self, store: UsersStore):
        self.store = store
        self._ui_state = MutableStateFlow(UserUiState())

    @property
    def ui_state(self) -> StateFlow[UserUiState]:
        """Observable entry state. Only this view-model writes it."""
        return self._ui_state

    @property
    def user_ui_state(self) -> UserUiState:
        return self._ui_state.value

    def update_ui_state(self, user_details: UserDetails) -> None:
        """Replace the draft and re-validate. Published immediately."""
        self._ui_state.value = UserUiState(
            user_details=user_details,
            is_entry_valid=validate_input(user_details),
        )

    async def save_user(self) -> User | None:
        """Persist a valid draft (insert for id 0, update otherwise). None when the draft is invalid."""
        state = self._ui_state.value
        if not state.is_entry_valid:
            logger.debug("save_user: draft incomplete, not saving")
            return None
        user = to_user(state.user_details)
        if user.id == 0:
            saved = await self.store.insert_user(user)
        else:
            saved = await self.store.update_user(user)
        self._ui_state.value = UserUiState()
        return saved


class UserEditViewModel(UserEntryViewModel):
    """Entry view-model seeded from an existing user; saving updates it."""

    def __init__(self, store: UsersStore, saved_state: Mapping[str, Any]):
        super().__init__(store)
        self.user_id = require_user_id(saved_state)

    async def load(self) -> None:
        """Fill the draft from the stored user."""
        user = await first(self.store.get_user_stream(self.user_id))
        if user is None:
            raise UserNotFoundError(self.user_id)
        self._ui_state.value = to_user_ui_state(user, is_entry_valid=True)
