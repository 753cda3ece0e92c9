"""Navigation arguments handed to view-models by the screen that opens them."""

from collections.abc import Mapping
from typing import Any

from inventory.core.errors import MissingArgumentError

USER_ID_ARG = "userId"


def require_user_id(saved_state: Mapping[str, Any]) -> int:
    """Read the user id once. A screen without one cannot know what to show, so fail fast."""
    value = saved_state.get(USER_ID_ARG)
    if value is None or isinstance(value, bool):
        raise MissingArgumentError(USER_ID_ARG, value)
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise MissingArgumentError(USER_ID_ARG, value) from exc
