"""Tests for money rounding, share quantities and symbols."""

from decimal import Decimal

import pytest

from papertrader.domain.exceptions import ErrorCode, InvalidOrderError, InvalidQuantityError
from papertrader.domain.value_objects import (
    Symbol,
    round_money,
    round_percent,
    to_decimal,
    to_share_quantity,
)


class TestMoney:
    """Conversion and half-up rounding."""

    def test_float_converts_without_binary_artifacts(self):
        assert to_decimal(0.1) == Decimal("0.1")
        assert to_decimal(178.72) == Decimal("178.72")

    def test_string_and_int_inputs(self):
        assert to_decimal("50.25") == Decimal("50.25")
        assert to_decimal(7) == Decimal("7")

    @pytest.mark.parametrize("value", ["abc", float("nan"), float("inf"), True])
    def test_rejects_non_numeric(self, value):
        with pytest.raises(ValueError):
            to_decimal(value)

    def test_round_money_half_up(self):
        assert round_money(Decimal("179.146666")) == Decimal("179.15")
        assert round_money(Decimal("0.005")) == Decimal("0.01")
        assert round_money(Decimal("2.675")) == Decimal("2.68")

    def test_round_percent(self):
        assert round_percent(Decimal("1.128")) == Decimal("1.13")
        assert round_percent(Decimal("-0.125")) == Decimal("-0.13")


class TestShareQuantity:
    """Validation of requested quantities."""

    def test_accepts_positive_int(self):
        assert to_share_quantity(100) == 100

    def test_accepts_integral_float_and_decimal(self):
        assert to_share_quantity(10.0) == 10
        assert to_share_quantity(Decimal("25")) == 25

    @pytest.mark.parametrize("value", [0, -5, 1.5, Decimal("2.25"), "10", None, True])
    def test_rejects_invalid(self, value):
        with pytest.raises(InvalidQuantityError) as exc_info:
            to_share_quantity(value)

        assert exc_info.value.code == ErrorCode.INVALID_QUANTITY


class TestSymbol:
    """Ticker normalization."""

    def test_normalizes_to_uppercase(self):
        assert Symbol(" aapl ").value == "AAPL"

    def test_equality_with_strings(self):
        assert Symbol("msft") == "MSFT"
        assert Symbol("msft") == Symbol("MSFT")
        assert hash(Symbol("msft")) == hash(Symbol("MSFT"))

    @pytest.mark.parametrize("value", ["", "   ", None, 123])
    def test_rejects_empty(self, value):
        with pytest.raises(InvalidOrderError):
            Symbol(value)

    def test_immutable(self):
        symbol = Symbol("AAPL")
        with pytest.raises(AttributeError):
            symbol._value = "MSFT"
