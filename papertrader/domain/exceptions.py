"""
Domain-level exceptions for the paper trading engine.

Every error carries a machine-readable ``code`` and structured ``details`` so
callers branch on the kind of failure, never on message text. All of them are
raised synchronously at the point of violation and before any state changes.
"""

from decimal import Decimal
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Error kinds raised by the engine."""

    INVALID_QUANTITY = "INVALID_QUANTITY"
    INVALID_ORDER = "INVALID_ORDER"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    POSITION_NOT_FOUND = "POSITION_NOT_FOUND"
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
    INVALID_STATE = "INVALID_STATE"


class TradingError(Exception):
    """Base exception for all trading errors."""

    code: ErrorCode

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class InvalidQuantityError(TradingError):
    """Raised when a requested quantity is not a positive integer."""

    code = ErrorCode.INVALID_QUANTITY

    def __init__(self, quantity: Any) -> None:
        super().__init__(
            f"Invalid quantity {quantity!r}. Must be a positive integer.",
            details={"quantity": str(quantity)},
        )
        self.quantity = quantity


class InvalidOrderError(TradingError):
    """Raised when an order request is malformed."""

    code = ErrorCode.INVALID_ORDER

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"Invalid order field '{field}': {reason}", details={"field": field})
        self.field = field
        self.reason = reason


class InsufficientFundsError(TradingError):
    """Raised when a buy costs more than the available buying power."""

    code = ErrorCode.INSUFFICIENT_FUNDS

    def __init__(self, required: Decimal, available: Decimal) -> None:
        super().__init__(
            f"Insufficient funds. Required: ${required:.2f}, Available: ${available:.2f}",
            details={"required": str(required), "available": str(available)},
        )
        self.required = required
        self.available = available


class PositionNotFoundError(TradingError):
    """Raised when a sell has no position, or not enough shares, behind it."""

    code = ErrorCode.POSITION_NOT_FOUND

    def __init__(self, symbol: str, requested: int | None = None, available: int = 0) -> None:
        message = f"Position not found for symbol: {symbol}"
        if requested is not None and available:
            message = (
                f"Insufficient position for symbol: {symbol}. "
                f"Requested {requested}, held {available}"
            )
        super().__init__(
            message,
            details={"symbol": symbol, "requested": requested, "available": available},
        )
        self.symbol = symbol
        self.requested = requested
        self.available = available


class OrderNotFoundError(TradingError):
    """Raised when an order id is unknown to the engine."""

    code = ErrorCode.ORDER_NOT_FOUND

    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order not found: {order_id}", details={"order_id": str(order_id)})
        self.order_id = order_id


class InvalidOrderStateError(TradingError):
    """Raised when fill or cancel is attempted on an order that is not pending."""

    code = ErrorCode.INVALID_STATE

    def __init__(self, order_id: str, status: str, operation: str) -> None:
        super().__init__(
            f"Cannot {operation} order {order_id} with status: {status}",
            details={"order_id": str(order_id), "status": status, "operation": operation},
        )
        self.order_id = order_id
        self.status = status
        self.operation = operation
