"""
Conversions between stored users, form drafts and UI state.
Challenge: Form input is free text; conversion must never fail.
Design: Malformed numbers become zero here; validation upstream only checks for blanks.
"""

import locale
import math
import re

from inventory.config import get_settings
from inventory.schemas.ui_state import UserUiState
from inventory.schemas.user import User, UserDetails

_INT_PATTERN = re.compile(r"[+-]?\d+")


def _parse_price(text: str) -> float:
    """Decimal literal or 0.0. Surrounding whitespace, digit separators, nan and inf are rejected."""
    if not text or text != text.strip() or "_" in text:
        return 0.0
    try:
        value = float(text)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def _parse_quantity(text: str) -> int:
    """Integer literal (optional sign, digits only) or 0."""
    if not _INT_PATTERN.fullmatch(text):
        return 0
    return int(text)


def to_user(details: UserDetails) -> User:
    """Draft to storable user. Price/quantity fall back to zero when unparseable."""
    return User(
        id=details.id,
        name=details.name,
        price=_parse_price(details.price),
        quantity=_parse_quantity(details.quantity),
    )


def to_user_details(user: User) -> UserDetails:
    """Stored user to editable draft."""
    return UserDetails(
        id=user.id,
        name=user.name,
        price=str(user.price),
        quantity=str(user.quantity),
    )


def to_user_ui_state(user: User, is_entry_valid: bool = False) -> UserUiState:
    return UserUiState(user_details=to_user_details(user), is_entry_valid=is_entry_valid)


def formatted_price(user: User) -> str:
    """Price as currency text in the process locale.

    The C locale has no monetary conventions; the configured symbol is used instead.
    """
    try:
        return locale.currency(user.price, grouping=True)
    except ValueError:
        sign = "-" if user.price < 0 else ""
        return f"{sign}{get_settings().currency_symbol}{abs(user.price):,.2f}"
