"""
Domain errors raised by the users store and the view-models.
Challenge: Callers handle failures by type, never by parsing messages.
"""


class InventoryError(Exception):
    """Base class for all inventory errors."""


class ConstraintViolationError(InventoryError):
    """Insert would create a second live user with the same id."""

    def __init__(self, user_id: int):
        super().__init__(f"User with id {user_id} already exists")
        self.user_id = user_id


class UserNotFoundError(InventoryError, LookupError):
    """No live user with the requested id."""

    def __init__(self, user_id: int):
        super().__init__(f"User with id {user_id} not found")
        self.user_id = user_id


class MissingArgumentError(InventoryError, ValueError):
    """A required navigation argument is absent or malformed."""

    def __init__(self, key: str, value: object = None):
        detail = "missing" if value is None else f"invalid value {value!r}"
        super().__init__(f"Navigation argument {key!r} is {detail}")
        self.key = key
