"""
Entry/edit view-model tests - draft state, validation and saving.
"""

import pytest

from inventory.core.errors import MissingArgumentError, UserNotFoundError
from inventory.core.flow import first
from inventory.schemas.ui_state import UserUiState
from inventory.schemas.user import User, UserDetails
from inventory.services.user_mapping import to_user_details
from inventory.viewmodels.navigation import USER_ID_ARG
from inventory.viewmodels.user_entry_vm import UserEditViewModel, UserEntryViewModel


@pytest.mark.asyncio
async def test_initial_state_is_empty_and_invalid(store):
    vm = UserEntryViewModel(store)
    assert vm.user_ui_state == UserUiState()
    assert vm.user_ui_state.is_entry_valid is False


@pytest.mark.asyncio
async def test_update_ui_state_last_write_wins(store):
    """Two submissions in a row publish only the second draft, never a merge."""
    vm = UserEntryViewModel(store)
    first_draft = UserDetails(name="A", price="1", quantity="1")
    second_draft = UserDetails(name="B", price="", quantity="2")

    vm.update_ui_state(first_draft)
    assert vm.user_ui_state.is_entry_valid is True
    vm.update_ui_state(second_draft)

    expected = UserUiState(user_details=second_draft, is_entry_valid=False)
    assert vm.user_ui_state == expected
    assert await first(vm.ui_state.subscribe()) == expected


@pytest.mark.asyncio
async def test_save_inserts_new_user_and_resets_draft(store):
    vm = UserEntryViewModel(store)
    vm.update_ui_state(UserDetails(name="Jose", price="33.0", quantity="33"))

    saved = await vm.save_user()

    assert saved is not None
    assert saved.id > 0
    assert (saved.name, saved.price, saved.quantity) == ("Jose", 33.0, 33)
    assert vm.user_ui_state == UserUiState()
    assert await first(store.get_all_users()) == [saved]


@pytest.mark.asyncio
async def test_save_invalid_draft_does_nothing(store):
    vm = UserEntryViewModel(store)
    draft = UserDetails(name="Jose", price="", quantity="3")
    vm.update_ui_state(draft)

    assert await vm.save_user() is None
    assert vm.user_ui_state.user_details == draft
    assert await first(store.get_all_users()) == []


@pytest.mark.asyncio
async def test_save_turns_malformed_numbers_into_zero(store):
    """Non-numeric but non-blank text passes validation and is stored as zero."""
    vm = UserEntryViewModel(store)
    vm.update_ui_state(UserDetails(name="Jose", price="abc", quantity="xyz"))

    saved = await vm.save_user()

    assert (saved.price, saved.quantity) == (0.0, 0)


@pytest.mark.asyncio
async def test_save_with_existing_id_updates(store):
    jose = await store.insert_user(User(name="Jose", price=33.0, quantity=33))
    vm = UserEntryViewModel(store)
    vm.update_ui_state(UserDetails(id=jose.id, name="Jose", price="30.0", quantity="10"))

    saved = await vm.save_user()

    assert saved == User(id=jose.id, name="Jose", price=30.0, quantity=10)
    assert await first(store.get_all_users()) == [saved]


@pytest.mark.asyncio
async def test_edit_view_model_loads_and_updates(store):
    jose = await store.insert_user(User(name="Jose", price=33.0, quantity=33))
    vm = UserEditViewModel(store, {USER_ID_ARG: jose.id})

    await vm.load()
    assert vm.user_ui_state == UserUiState(user_details=to_user_details(jose), is_entry_valid=True)

    vm.update_ui_state(vm.user_ui_state.user_details.model_copy(update={"quantity": "5"}))
    saved = await vm.save_user()

    assert saved == jose.model_copy(update={"quantity": 5})
    assert await first(store.get_user_stream(jose.id)) == saved


@pytest.mark.asyncio
async def test_edit_view_model_load_missing_user_raises(store):
    vm = UserEditViewModel(store, {USER_ID_ARG: 404})
    with pytest.raises(UserNotFoundError):
        await vm.load()


@pytest.mark.asyncio
async def test_edit_view_model_requires_user_id(store):
    with pytest.raises(MissingArgumentError):
        UserEditViewModel(store, {})
