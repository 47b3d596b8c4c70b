"""Value objects and the monetary rounding policy."""

from .money import round_money, round_percent, to_decimal
from .quantity import to_share_quantity
from .symbol import Symbol

__all__ = ["Symbol", "round_money", "round_percent", "to_decimal", "to_share_quantity"]
