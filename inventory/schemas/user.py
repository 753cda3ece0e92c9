"""User record and its editable draft - the contract between store and view-models."""

from pydantic import BaseModel


class User(BaseModel):
    """Stored inventory user. Immutable snapshot; compared by value."""

    id: int = 0
    name: str
    price: float = 0.0
    quantity: int = 0

    model_config = {"from_attributes": True, "frozen": True}


class UserDetails(BaseModel):
    """Unsaved form draft. Numbers are kept as typed text; id 0 means not yet stored."""

    id: int = 0
    name: str = ""
    price: str = ""
    quantity: str = ""

    model_config = {"frozen": True}
