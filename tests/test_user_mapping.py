"""
Draft validation and conversion tests - form text in, stored user out (TDD).
Challenge: Conversion never fails; valid literals survive the round trip.
"""

import pytest

from inventory.schemas.ui_state import UserUiState
from inventory.schemas.user import User, UserDetails
from inventory.services import user_mapping
from inventory.services.user_mapping import formatted_price, to_user, to_user_details, to_user_ui_state
from inventory.viewmodels.user_entry_vm import validate_input

C_LOCALE_CONV = {
    "currency_symbol": "",
    "frac_digits": 127,
    "mon_decimal_point": "",
    "mon_thousands_sep": "",
}

DE_LOCALE_CONV = {
    "decimal_point": ",",
    "thousands_sep": ".",
    "grouping": [3, 3, 0],
    "int_curr_symbol": "EUR ",
    "currency_symbol": "€",
    "mon_decimal_point": ",",
    "mon_thousands_sep": ".",
    "mon_grouping": [3, 3, 0],
    "positive_sign": "",
    "negative_sign": "-",
    "int_frac_digits": 2,
    "frac_digits": 2,
    "p_cs_precedes": 0,
    "p_sep_by_space": 1,
    "n_cs_precedes": 0,
    "n_sep_by_space": 1,
    "p_sign_posn": 1,
    "n_sign_posn": 1,
}


@pytest.mark.parametrize(
    "details, expected",
    [
        (UserDetails(name="Jose", price="33.0", quantity="33"), True),
        (UserDetails(name="Jose", price="abc", quantity="xyz"), True),
        (UserDetails(name="", price="33.0", quantity="33"), False),
        (UserDetails(name="Jose", price="   ", quantity="33"), False),
        (UserDetails(name="Jose", price="33.0", quantity="\t"), False),
        (UserDetails(), False),
    ],
)
def test_validate_input_requires_non_blank_fields(details, expected):
    """Validation only checks that every field has content."""
    assert validate_input(details) is expected


def test_to_user_parses_numbers():
    user = to_user(UserDetails(id=4, name="Jose", price="33.5", quantity="-2"))
    assert user == User(id=4, name="Jose", price=33.5, quantity=-2)


@pytest.mark.parametrize("price", ["abc", "", " 12", "1_000", "nan", "inf", "12,5"])
def test_to_user_malformed_price_becomes_zero(price):
    assert to_user(UserDetails(name="x", price=price, quantity="1")).price == 0.0


@pytest.mark.parametrize("quantity", ["xyz", "", "1.5", " 3", "3 ", "1e3"])
def test_to_user_malformed_quantity_becomes_zero(quantity):
    assert to_user(UserDetails(name="x", price="1", quantity=quantity)).quantity == 0


@pytest.mark.parametrize(
    "user",
    [
        User(id=1, name="Jose", price=33.0, quantity=33),
        User(id=2, name="Maria", price=0.1, quantity=0),
        User(id=3, name="Joao", price=1e-07, quantity=-5),
    ],
)
def test_user_survives_draft_round_trip(user):
    """Drafts made from stored users convert back to the same numbers."""
    assert to_user(to_user_details(user)) == user


def test_draft_with_valid_literals_round_trips():
    details = UserDetails(id=9, name="Jose", price="33.0", quantity="33")
    assert to_user_details(to_user(details)) == details


def test_to_user_ui_state_wraps_details():
    user = User(id=1, name="Jose", price=2.5, quantity=1)
    assert to_user_ui_state(user, is_entry_valid=True) == UserUiState(
        user_details=UserDetails(id=1, name="Jose", price="2.5", quantity="1"),
        is_entry_valid=True,
    )


def test_formatted_price_falls_back_to_configured_symbol(monkeypatch):
    monkeypatch.setattr(user_mapping.locale, "localeconv", lambda: C_LOCALE_CONV)
    assert formatted_price(User(name="x", price=1234.5)) == "$1,234.50"
    assert formatted_price(User(name="x", price=-5)) == "-$5.00"


def test_formatted_price_follows_locale_symbol_placement(monkeypatch):
    """de_DE puts the symbol after the amount, separated by a space."""
    monkeypatch.setattr(user_mapping.locale, "localeconv", lambda: DE_LOCALE_CONV)
    assert formatted_price(User(name="x", price=1234.5)) == "1.234,50 €"
    assert formatted_price(User(name="x", price=-5)) == "-5,00 €"
