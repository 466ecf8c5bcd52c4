from decimal import Decimal

import pytest

from budget_ledger.core.exceptions import ValidationError
from budget_ledger.core.validators import (
    clean_color,
    clean_description,
    clean_name,
    non_negative_amount,
    positive_amount,
    to_amount,
)


def test_to_amount_accepts_common_inputs():
    assert to_amount("12.5") == Decimal("12.50")
    assert to_amount(0.1) == Decimal("0.10")
    assert to_amount(3) == Decimal("3.00")


@pytest.mark.parametrize("value", ["abc", None, True, "NaN", float("inf")])
def test_to_amount_rejects_non_numbers(value):
    with pytest.raises(ValidationError):
        to_amount(value)


def test_positive_and_non_negative():
    with pytest.raises(ValidationError):
        positive_amount(0)
    with pytest.raises(ValidationError):
        positive_amount("-1")
    with pytest.raises(ValidationError):
        non_negative_amount(-0.01, "income")
    assert non_negative_amount(0, "income") == Decimal("0")


@pytest.mark.parametrize("value", ["1e30", "1e10", -10_000_000_000, "9999999999.999"])
def test_to_amount_rejects_values_beyond_column_range(value):
    with pytest.raises(ValidationError):
        to_amount(value)


def test_to_amount_accepts_largest_storable_value():
    assert to_amount("9999999999.99") == Decimal("9999999999.99")


def test_clean_name_trims_and_rejects_blank():
    assert clean_name("  Miete ") == "Miete"
    with pytest.raises(ValidationError):
        clean_name("   ")


def test_clean_color_defaults_and_validates():
    assert clean_color(None, "#3b82f6") == "#3b82f6"
    assert clean_color("#FFF", "#3b82f6") == "#FFF"
    with pytest.raises(ValidationError):
        clean_color("blue", "#3b82f6")


def test_clean_description_blank_is_none():
    assert clean_description("   ") is None
    assert clean_description(" Brot ") == "Brot"
