"""Monetary conversion and rounding policy.

This is the only place that decides how money is rounded. Cash, buying power,
average cost, market value and P/L are rounded half-up to cents; percentages are
rounded half-up to two decimal places.
"""

# Standard library imports
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENTS = Decimal("0.01")
PERCENT_QUANTUM = Decimal("0.01")


def to_decimal(value: Decimal | float | int | str) -> Decimal:
    """Convert a numeric input to Decimal without binary float artifacts.

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a numeric value: {value!r}")
    if not isinstance(value, Decimal):
        try:
            value = Decimal(str(value))
        except InvalidOperation as e:
            raise ValueError(f"Not a numeric value: {value!r}") from e

    if not value.is_finite():
        raise ValueError(f"Not a finite value: {value!r}")
    return value


def round_money(value: Decimal | float | int | str) -> Decimal:
    """Round a monetary amount half-up to cents."""
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def round_percent(value: Decimal | float | int | str) -> Decimal:
    """Round a percentage half-up to two decimal places."""
    return to_decimal(value).quantize(PERCENT_QUANTUM, rounding=ROUND_HALF_UP)
