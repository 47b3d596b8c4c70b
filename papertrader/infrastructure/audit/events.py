"""
Audit event definitions for paper trading operations.

Each entry captures one state-changing action: the action tag, the affected
symbol/side/quantity/price/order type where they apply, the trading mode and
free-form metadata. Entries are frozen once created.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Mapping
from uuid import uuid4

from ...domain.entities.order import OrderSide, OrderType, TradingMode


def _freeze(metadata: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(metadata or {}))


@dataclass(frozen=True)
class AuditLogEntry:
    """Immutable audit record."""

    sequence: int
    timestamp: datetime
    action: str
    mode: TradingMode
    symbol: str | None = None
    side: OrderSide | None = None
    quantity: int | None = None
    price: Decimal | None = None
    order_type: OrderType | None = None
    metadata: Mapping[str, Any] = field(default_factory=lambda: _freeze(None))
    id: str = field(default_factory=lambda: f"audit-{uuid4()}")

    def __post_init__(self) -> None:
        if not self.action:
            raise ValueError("Audit action is required")
        if not isinstance(self.metadata, MappingProxyType):
            object.__setattr__(self, "metadata", _freeze(self.metadata))

    def to_dict(self) -> dict[str, Any]:
        """Convert audit entry to dictionary representation."""
        return {
            "id": self.id,
            "sequence": self.sequence,
            "timestamp": self.timestamp.isoformat(),
            "action": self.action,
            "mode": self.mode.value,
            "symbol": self.symbol,
            "side": self.side.value if self.side else None,
            "quantity": self.quantity,
            "price": str(self.price) if self.price is not None else None,
            "order_type": self.order_type.value if self.order_type else None,
            "metadata": {
                key: str(value) if isinstance(value, Decimal) else value
                for key, value in self.metadata.items()
            },
        }
