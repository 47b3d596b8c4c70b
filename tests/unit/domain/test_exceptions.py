"""Tests for the trading error taxonomy."""

from decimal import Decimal

from papertrader.domain.exceptions import (
    ErrorCode,
    InsufficientFundsError,
    InvalidOrderStateError,
    OrderNotFoundError,
    PositionNotFoundError,
    TradingError,
)


class TestTradingErrors:
    def test_insufficient_funds_message_and_details(self):
        error = InsufficientFundsError(Decimal("357440.00"), Decimal("200000.00"))

        assert isinstance(error, TradingError)
        assert error.code == ErrorCode.INSUFFICIENT_FUNDS
        assert str(error) == "Insufficient funds. Required: $357440.00, Available: $200000.00"

    def test_position_not_found_without_holding(self):
        error = PositionNotFoundError("TSLA", requested=5)

        assert error.message == "Position not found for symbol: TSLA"
        assert error.details["available"] == 0

    def test_position_not_found_with_partial_holding(self):
        error = PositionNotFoundError("AAPL", requested=11, available=10)

        assert "Requested 11, held 10" in error.message

    def test_to_dict(self):
        data = OrderNotFoundError("order-123").to_dict()

        assert data == {
            "error_type": "OrderNotFoundError",
            "code": "ORDER_NOT_FOUND",
            "message": "Order not found: order-123",
            "details": {"order_id": "order-123"},
        }

    def test_invalid_state(self):
        error = InvalidOrderStateError("order-1", "filled", "cancel")

        assert error.code == ErrorCode.INVALID_STATE
        assert error.details["status"] == "filled"
