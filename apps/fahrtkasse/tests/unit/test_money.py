from decimal import Decimal

import pytest

from fahrtkasse.domain.money import (
    MAX_AMOUNT,
    coerce_money,
    format_money,
    is_storable_amount,
    parse_amount,
    quantize_money,
)


def test_quantize_money_uses_round_half_up() -> None:
    assert quantize_money(Decimal("10.005")) == Decimal("10.01")
    assert quantize_money(Decimal("10.004")) == Decimal("10.00")


def test_format_money_has_two_decimal_places() -> None:
    assert format_money(Decimal("5")) == "5.00"
    assert format_money(Decimal("-12.5")) == "-12.50"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (Decimal("12.5"), Decimal("12.50")),
        (7, Decimal("7.00")),
        (0.1, Decimal("0.10")),
        (" 2.675 ", Decimal("2.68")),
        ("-3", Decimal("-3.00")),
    ],
)
def test_parse_amount_accepts_numbers_and_numeric_strings(
    value: object, expected: Decimal
) -> None:
    assert parse_amount(value) == expected


@pytest.mark.parametrize("value", [True, None, "abc", "", "NaN", "Infinity", [], {}])
def test_parse_amount_rejects_non_numeric_values(value: object) -> None:
    assert parse_amount(value) is None


def test_coerce_money_falls_back_to_zero() -> None:
    assert coerce_money("-5") == Decimal("0.00")
    assert coerce_money("oops") == Decimal("0.00")
    assert coerce_money(False) == Decimal("0.00")
    assert coerce_money("4.2") == Decimal("4.20")


def test_storable_amount_bounds() -> None:
    assert is_storable_amount(Decimal("0.00"))
    assert is_storable_amount(MAX_AMOUNT)
    assert not is_storable_amount(MAX_AMOUNT + Decimal("0.01"))
    assert not is_storable_amount(Decimal("-0.01"))


def test_coerce_money_rejects_amounts_above_storable_maximum() -> None:
    assert coerce_money("9999999999.99") == MAX_AMOUNT
    assert coerce_money("10000000000") == Decimal("0.00")
