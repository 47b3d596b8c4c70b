"""
Order Entity - Paper trading order and its lifecycle
"""

from __future__ import annotations

# Standard library imports
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import uuid4

from ..exceptions import InvalidOrderError, InvalidOrderStateError
from ..value_objects import Symbol, to_decimal, to_share_quantity


class OrderSide(Enum):
    """Order side enumeration"""

    BUY = "buy"
    SELL = "sell"


class OrderType(Enum):
    """Order type enumeration"""

    MARKET = "market"
    LIMIT = "limit"
    STOP = "stop"
    STOP_LIMIT = "stop_limit"


class OrderStatus(Enum):
    """Order status enumeration. PENDING is the only non-terminal state."""

    PENDING = "pending"
    FILLED = "filled"
    CANCELLED = "cancelled"
    REJECTED = "rejected"


class TradingMode(Enum):
    """Trading mode enumeration"""

    PAPER = "paper"
    LIVE = "live"


def _coerce_enum(enum_cls: type[Enum], value: Any, field_name: str) -> Any:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError as e:
        allowed = ", ".join(member.value for member in enum_cls)
        raise InvalidOrderError(field_name, f"expected one of {allowed}, got {value!r}") from e


def _positive_price(value: Any, field_name: str) -> Decimal:
    try:
        price = to_decimal(value)
    except ValueError as e:
        raise InvalidOrderError(field_name, str(e)) from e
    if price <= 0:
        raise InvalidOrderError(field_name, f"must be positive, got {price}")
    return price


@dataclass
class OrderRequest:
    """Request parameters for placing an order.

    Side and type may be given as enums or their string values.
    """

    symbol: str
    side: OrderSide | str
    order_type: OrderType | str
    quantity: Any
    limit_price: Decimal | float | int | str | None = None
    stop_price: Decimal | float | int | str | None = None

    def __post_init__(self) -> None:
        self.side = _coerce_enum(OrderSide, self.side, "side")
        self.order_type = _coerce_enum(OrderType, self.order_type, "order_type")


@dataclass
class Order:
    """
    Order entity representing a paper trading order.

    Filled price and filled quantity are set if and only if the status is FILLED.
    """

    # Core attributes
    symbol: str
    side: OrderSide
    order_type: OrderType
    quantity: int

    # Identity
    id: str = field(default_factory=lambda: f"order-{uuid4()}")

    # Pricing
    limit_price: Decimal | None = None
    stop_price: Decimal | None = None

    # Execution
    status: OrderStatus = OrderStatus.PENDING
    filled_price: Decimal | None = None
    filled_quantity: int | None = None

    # Timestamps
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    filled_at: datetime | None = None
    cancelled_at: datetime | None = None

    mode: TradingMode = TradingMode.PAPER

    def __post_init__(self) -> None:
        """Validate order after initialization"""
        self._validate()

    def _validate(self) -> None:
        if not self.symbol:
            raise InvalidOrderError("symbol", "symbol cannot be empty")

        if self.quantity <= 0:
            raise InvalidOrderError("quantity", f"must be positive, got {self.quantity}")

        if self.order_type in (OrderType.LIMIT, OrderType.STOP_LIMIT) and self.limit_price is None:
            raise InvalidOrderError("limit_price", f"required for {self.order_type.value} orders")

        if self.order_type in (OrderType.STOP, OrderType.STOP_LIMIT) and self.stop_price is None:
            raise InvalidOrderError("stop_price", f"required for {self.order_type.value} orders")

        is_filled = self.status == OrderStatus.FILLED
        has_fill = self.filled_price is not None and self.filled_quantity is not None
        if is_filled != has_fill:
            raise ValueError("Filled price and quantity must be set exactly when order is filled")

    @classmethod
    def from_request(cls, request: OrderRequest, mode: TradingMode = TradingMode.PAPER) -> Order:
        """Factory method validating a request into a new pending order.

        Raises:
            InvalidQuantityError: If the quantity is not a positive integer
            InvalidOrderError: If the symbol or a required price is missing or invalid
        """
        quantity = to_share_quantity(request.quantity)
        symbol = Symbol(request.symbol)

        limit_price = None
        if request.limit_price is not None:
            limit_price = _positive_price(request.limit_price, "limit_price")
        stop_price = None
        if request.stop_price is not None:
            stop_price = _positive_price(request.stop_price, "stop_price")

        return cls(
            symbol=symbol.value,
            side=OrderSide(request.side),
            order_type=OrderType(request.order_type),
            quantity=quantity,
            limit_price=limit_price,
            stop_price=stop_price,
            mode=mode,
        )

    # Lifecycle

    def fill(self, price: Decimal, timestamp: datetime | None = None) -> None:
        """Record a complete fill at the given price."""
        if self.status != OrderStatus.PENDING:
            raise InvalidOrderStateError(self.id, self.status.value, "fill")

        self.status = OrderStatus.FILLED
        self.filled_price = price
        self.filled_quantity = self.quantity
        self.filled_at = timestamp or datetime.now(UTC)

    def cancel(self, timestamp: datetime | None = None) -> None:
        """Cancel the order"""
        if self.status != OrderStatus.PENDING:
            raise InvalidOrderStateError(self.id, self.status.value, "cancel")

        self.status = OrderStatus.CANCELLED
        self.cancelled_at = timestamp or datetime.now(UTC)

    def is_pending(self) -> bool:
        return self.status == OrderStatus.PENDING

    def is_complete(self) -> bool:
        """Check if order is in terminal state"""
        return self.status != OrderStatus.PENDING

    # Pricing rules

    def execution_price_candidate(self, reference_price: Decimal) -> Decimal:
        """Price used to check funds: the limit for limit-style orders, else the reference."""
        if self.order_type in (OrderType.LIMIT, OrderType.STOP_LIMIT) and self.limit_price:
            return self.limit_price
        return reference_price

    def limit_satisfied(self, reference_price: Decimal) -> bool:
        if self.limit_price is None:
            raise InvalidOrderError("limit_price", f"not set on {self.order_type.value} order")
        if self.side == OrderSide.BUY:
            return reference_price <= self.limit_price
        return reference_price >= self.limit_price

    def stop_triggered(self, reference_price: Decimal) -> bool:
        if self.stop_price is None:
            raise InvalidOrderError("stop_price", f"not set on {self.order_type.value} order")
        if self.side == OrderSide.BUY:
            return reference_price >= self.stop_price
        return reference_price <= self.stop_price

    def fills_on_submit(self, reference_price: Decimal) -> bool:
        """Market orders and marketable limit orders fill as soon as they are placed."""
        if self.order_type == OrderType.MARKET:
            return True
        if self.order_type == OrderType.LIMIT:
            return self.limit_satisfied(reference_price)
        return False

    def should_fill(self, reference_price: Decimal) -> bool:
        """Check whether a pending order's trigger conditions hold at this price."""
        if self.order_type == OrderType.STOP:
            return self.stop_triggered(reference_price)
        if self.order_type == OrderType.STOP_LIMIT:
            return self.stop_triggered(reference_price) and self.limit_satisfied(reference_price)
        return self.fills_on_submit(reference_price)

    # Serialization

    def copy(self) -> Order:
        return replace(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "symbol": self.symbol,
            "side": self.side.value,
            "type": self.order_type.value,
            "quantity": self.quantity,
            "limit_price": str(self.limit_price) if self.limit_price is not None else None,
            "stop_price": str(self.stop_price) if self.stop_price is not None else None,
            "status": self.status.value,
            "filled_price": str(self.filled_price) if self.filled_price is not None else None,
            "filled_quantity": self.filled_quantity,
            "created_at": self.created_at.isoformat(),
            "filled_at": self.filled_at.isoformat() if self.filled_at else None,
            "cancelled_at": self.cancelled_at.isoformat() if self.cancelled_at else None,
            "mode": self.mode.value,
        }

    def __str__(self) -> str:
        price_str = ""
        if self.order_type in (OrderType.LIMIT, OrderType.STOP_LIMIT) and self.limit_price:
            price_str = f" @ {self.limit_price}"
        elif self.order_type == OrderType.STOP and self.stop_price:
            price_str = f" stop @ {self.stop_price}"

        return (
            f"Order({self.id}: {self.side.value.upper()} {self.quantity} {self.symbol}"
            f"{price_str} - {self.status.value})"
        )
