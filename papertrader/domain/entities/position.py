"""
Position Entity - Open holding in one symbol with cost basis and P/L tracking
"""

from __future__ import annotations

# Standard library imports
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from ..value_objects import round_money, round_percent


@dataclass
class Position:
    """
    Position entity representing an open long holding.

    The exact cost basis (total paid for the shares still held) is kept
    unrounded; the average price and P/L figures are derived from it and
    rounded through the money policy only when read.
    """

    symbol: str
    quantity: int
    cost_basis: Decimal
    current_price: Decimal

    opened_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    last_updated: datetime | None = None

    def __post_init__(self) -> None:
        """Validate position after initialization"""
        if not self.symbol:
            raise ValueError("Position symbol cannot be empty")
        if self.quantity <= 0:
            raise ValueError("Open position must have a positive quantity")
        if self.cost_basis < 0:
            raise ValueError("Cost basis cannot be negative")

    @classmethod
    def open_position(cls, symbol: str, quantity: int, price: Decimal) -> Position:
        """Factory method to open a new position from a buy fill."""
        if price <= 0:
            raise ValueError("Entry price must be positive")

        return cls(
            symbol=symbol,
            quantity=quantity,
            cost_basis=price * quantity,
            current_price=price,
        )

    # Mutations

    def add_to_position(self, quantity: int, price: Decimal) -> None:
        """Add a buy fill; the average cost becomes the quantity-weighted mean."""
        if quantity <= 0:
            raise ValueError("Quantity to add must be positive")

        self.cost_basis = self.cost_basis + price * quantity
        self.quantity = self.quantity + quantity
        self.last_updated = datetime.now(UTC)

    def reduce_position(self, quantity: int, price: Decimal) -> Decimal:
        """
        Remove sold shares from the position.

        Returns:
            Unrounded realized P/L of the sold shares against the average cost
        """
        if quantity <= 0:
            raise ValueError("Quantity to reduce must be positive")
        if quantity > self.quantity:
            raise ValueError(
                f"Cannot reduce position by {quantity}, current quantity is {self.quantity}"
            )

        average = self.exact_average_price
        realized = (price - average) * quantity

        remaining = self.quantity - quantity
        self.cost_basis = average * remaining if remaining > 0 else Decimal("0")
        self.quantity = remaining
        self.last_updated = datetime.now(UTC)
        return realized

    def update_market_price(self, price: Decimal) -> None:
        """Update last known market price"""
        if price <= 0:
            raise ValueError("Market price must be positive")

        self.current_price = price
        self.last_updated = datetime.now(UTC)

    def is_closed(self) -> bool:
        return self.quantity <= 0

    # Derived values

    @property
    def exact_average_price(self) -> Decimal:
        return self.cost_basis / self.quantity

    @property
    def average_price(self) -> Decimal:
        return round_money(self.exact_average_price)

    @property
    def market_value(self) -> Decimal:
        return round_money(self.current_price * self.quantity)

    @property
    def unrealized_pl(self) -> Decimal:
        return round_money(self.current_price * self.quantity - self.cost_basis)

    @property
    def unrealized_pl_percent(self) -> Decimal:
        average = self.exact_average_price
        if average == 0:
            return Decimal("0.00")
        return round_percent((self.current_price - average) / average * 100)

    def copy(self) -> Position:
        return replace(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "symbol": self.symbol,
            "quantity": self.quantity,
            "average_price": str(self.average_price),
            "current_price": str(self.current_price),
            "market_value": str(self.market_value),
            "unrealized_pl": str(self.unrealized_pl),
            "unrealized_pl_percent": str(self.unrealized_pl_percent),
        }

    def __str__(self) -> str:
        return (
            f"Position({self.symbol}: {self.quantity} @ {self.average_price}"
            f", Unrealized P/L: {self.unrealized_pl})"
        )
