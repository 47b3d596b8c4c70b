"""Portfolio Entity - Consistent point-in-time view of the ledger"""

# Standard library imports
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from .position import Position


@dataclass(frozen=True)
class Portfolio:
    """Snapshot of cash, buying power, positions and derived totals.

    Positions are copies, so a snapshot never changes after it is taken.
    """

    cash: Decimal
    buying_power: Decimal
    positions: tuple[Position, ...]
    total_value: Decimal
    total_pl: Decimal
    total_pl_percent: Decimal
    initial_cash: Decimal
    as_of: datetime

    def get_position(self, symbol: str) -> Position | None:
        """Get position for a symbol"""
        symbol = symbol.upper()
        for position in self.positions:
            if position.symbol == symbol:
                return position
        return None

    @property
    def positions_value(self) -> Decimal:
        return sum((p.market_value for p in self.positions), Decimal("0"))

    def to_dict(self) -> dict[str, Any]:
        return {
            "cash": str(self.cash),
            "buying_power": str(self.buying_power),
            "positions": [p.to_dict() for p in self.positions],
            "total_value": str(self.total_value),
            "total_pl": str(self.total_pl),
            "total_pl_percent": str(self.total_pl_percent),
            "initial_cash": str(self.initial_cash),
            "as_of": self.as_of.isoformat(),
        }

    def __str__(self) -> str:
        """String representation of the portfolio."""
        return (
            f"Portfolio(cash={self.cash}, buying_power={self.buying_power}, "
            f"positions={len(self.positions)}, total_value={self.total_value})"
        )
