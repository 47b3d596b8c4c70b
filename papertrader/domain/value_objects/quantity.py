"""Share quantity validation."""

# Standard library imports
from decimal import Decimal, InvalidOperation
from typing import Any

from ..exceptions import InvalidQuantityError


def to_share_quantity(value: Any) -> int:
    """Validate a requested share quantity and return it as an int.

    Integral floats and Decimals (``10.0``) are accepted; fractional, zero,
    negative, boolean and non-numeric values are not.

    Raises:
        InvalidQuantityError: If the value is not a positive integer
    """
    if isinstance(value, bool):
        raise InvalidQuantityError(value)

    if isinstance(value, int):
        quantity = value
    elif isinstance(value, (float, Decimal)):
        try:
            as_decimal = Decimal(str(value))
            if not as_decimal.is_finite() or as_decimal != as_decimal.to_integral_value():
                raise InvalidQuantityError(value)
        except InvalidOperation as e:
            raise InvalidQuantityError(value) from e
        quantity = int(as_decimal)
    else:
        raise InvalidQuantityError(value)

    if quantity <= 0:
        raise InvalidQuantityError(value)
    return quantity
