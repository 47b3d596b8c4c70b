"""Tests for tracing helpers."""

from decimal import Decimal
from unittest.mock import Mock

import pytest

from papertrader.domain.entities import OrderSide
from papertrader.infrastructure.monitoring import (
    TradingSpanAttributes,
    add_trading_attributes,
    async_trading_span,
    trace_trading_operation,
    trading_span,
)


class TestAddTradingAttributes:
    def test_sets_known_attributes(self):
        span = Mock()

        add_trading_attributes(
            span,
            symbol="AAPL",
            order_side=OrderSide.BUY,
            quantity=100,
            price=Decimal("178.72"),
            **{"trading.realized_pl": Decimal("12.50")},
        )

        span.set_attributes.assert_called_once_with(
            {
                TradingSpanAttributes.TRADING_SYMBOL: "AAPL",
                TradingSpanAttributes.TRADING_ORDER_SIDE: "buy",
                TradingSpanAttributes.TRADING_QUANTITY: 100.0,
                TradingSpanAttributes.TRADING_PRICE: 178.72,
                "trading.realized_pl": 12.5,
            }
        )

    def test_nothing_to_set(self):
        span = Mock()
        add_trading_attributes(span)

        span.set_attributes.assert_not_called()


class TestSpans:
    def test_trading_span_reraises(self):
        with pytest.raises(RuntimeError):
            with trading_span("test.operation", symbol="AAPL"):
                raise RuntimeError("failed")

    @pytest.mark.asyncio
    async def test_async_trading_span(self):
        async with async_trading_span("test.async", order_id="order-1") as span:
            assert span is not None


class TestTraceTradingOperation:
    def test_sync_function(self):
        @trace_trading_operation("test.add")
        def add(a, b):
            return a + b

        assert add(2, 3) == 5
        assert add.__name__ == "add"

    @pytest.mark.asyncio
    async def test_async_function(self):
        @trace_trading_operation()
        async def double(value):
            return value * 2

        assert await double(21) == 42

    @pytest.mark.asyncio
    async def test_async_exception_propagates(self):
        @trace_trading_operation("test.fail")
        async def fail():
            raise ValueError("bad")

        with pytest.raises(ValueError, match="bad"):
            await fail()
