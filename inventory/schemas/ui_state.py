"""Immutable UI-state snapshots published by the view-models."""

from pydantic import BaseModel, Field

from inventory.schemas.user import User, UserDetails


class UserUiState(BaseModel):
    """Entry/edit screen: the draft plus whether it may be saved."""

    user_details: UserDetails = Field(default_factory=UserDetails)
    is_entry_valid: bool = False

    model_config = {"frozen": True}


class UserDetailsUiState(BaseModel):
    """Details screen. Reports out of stock until the user has loaded."""

    out_of_stock: bool = True
    user_details: UserDetails = Field(default_factory=UserDetails)

    model_config = {"frozen": True}


class HomeUiState(BaseModel):
    """List screen: every live user, ordered by id."""

    user_list: list[User] = Field(default_factory=list)

    model_config = {"frozen": True}
