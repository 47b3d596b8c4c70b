"""
Tracing helpers for paper trading operations.

Only the OpenTelemetry API is used here. Without an SDK installed and
configured by the host application, spans are non-recording and cost little.
"""

import inspect
import time
from collections.abc import AsyncGenerator, Generator
from contextlib import asynccontextmanager, contextmanager
from decimal import Decimal
from enum import Enum
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
from opentelemetry.util.types import AttributeValue

from ... import __version__

TRACER_NAME = "papertrader"


class TradingSpanAttributes:
    """Trading-specific span attribute names."""

    TRADING_SYMBOL = "trading.symbol"
    TRADING_ORDER_ID = "trading.order_id"
    TRADING_ORDER_TYPE = "trading.order_type"
    TRADING_ORDER_SIDE = "trading.order_side"
    TRADING_QUANTITY = "trading.quantity"
    TRADING_PRICE = "trading.price"
    TRADING_VALUE = "trading.value"
    TRADING_MODE = "trading.mode"


def trading_tracer() -> trace.Tracer:
    """Get trading system tracer."""
    return trace.get_tracer(TRACER_NAME, __version__)


def get_current_span() -> trace.Span:
    """Get current active span."""
    return trace.get_current_span()


def _attribute(value: Any) -> AttributeValue:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, Decimal):
        return float(value)
    return value


def add_trading_attributes(
    span: trace.Span,
    symbol: str | None = None,
    order_id: str | None = None,
    order_type: str | Enum | None = None,
    order_side: str | Enum | None = None,
    quantity: int | Decimal | None = None,
    price: Decimal | None = None,
    value: Decimal | None = None,
    mode: str | Enum | None = None,
    **kwargs: Any,
) -> None:
    """Add trading-specific attributes to a span."""
    attributes: dict[str, AttributeValue] = {}

    if symbol:
        attributes[TradingSpanAttributes.TRADING_SYMBOL] = str(symbol)
    if order_id:
        attributes[TradingSpanAttributes.TRADING_ORDER_ID] = order_id
    if order_type:
        attributes[TradingSpanAttributes.TRADING_ORDER_TYPE] = _attribute(order_type)
    if order_side:
        attributes[TradingSpanAttributes.TRADING_ORDER_SIDE] = _attribute(order_side)
    if quantity is not None:
        attributes[TradingSpanAttributes.TRADING_QUANTITY] = float(quantity)
    if price is not None:
        attributes[TradingSpanAttributes.TRADING_PRICE] = float(price)
    if value is not None:
        attributes[TradingSpanAttributes.TRADING_VALUE] = float(value)
    if mode:
        attributes[TradingSpanAttributes.TRADING_MODE] = _attribute(mode)

    for key, extra in kwargs.items():
        if key.startswith("trading.") and extra is not None:
            attributes[key] = _attribute(extra)

    if attributes:
        span.set_attributes(attributes)


@contextmanager
def trading_span(
    name: str,
    kind: trace.SpanKind = trace.SpanKind.INTERNAL,
    set_status_on_exception: bool = True,
    **span_attributes: Any,
) -> Generator[trace.Span, None, None]:
    """
    Context manager for creating trading spans with automatic attribute setting.

    Args:
        name: Span name
        kind: Span kind
        set_status_on_exception: Whether to set error status on exceptions
        **span_attributes: Trading-specific attributes

    Yields:
        Active span
    """
    with trading_tracer().start_as_current_span(
        name, kind=kind, record_exception=False, set_status_on_exception=False
    ) as span:
        try:
            add_trading_attributes(span, **span_attributes)
            yield span
        except Exception as e:
            if set_status_on_exception:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                span.record_exception(e)
            raise


@asynccontextmanager
async def async_trading_span(
    name: str,
    kind: trace.SpanKind = trace.SpanKind.INTERNAL,
    set_status_on_exception: bool = True,
    **span_attributes: Any,
) -> AsyncGenerator[trace.Span, None]:
    """Async counterpart of ``trading_span``."""
    with trading_span(
        name, kind=kind, set_status_on_exception=set_status_on_exception, **span_attributes
    ) as span:
        yield span


def trace_trading_operation(
    operation_name: str | None = None,
    span_kind: trace.SpanKind = trace.SpanKind.INTERNAL,
    record_exception: bool = True,
    **span_attributes: Any,
) -> Any:
    """
    Decorator for tracing trading operations.

    Works on both plain and coroutine functions.

    Args:
        operation_name: Custom operation name (defaults to module.function)
        span_kind: Type of span
        record_exception: Whether to record exceptions in span
        **span_attributes: Trading-specific attributes

    Returns:
        Decorated function
    """

    def decorator(func: Any) -> Any:
        name = operation_name or f"{func.__module__}.{func.__name__}"

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with trading_span(
                name, kind=span_kind, set_status_on_exception=record_exception, **span_attributes
            ) as span:
                span.set_attribute("function.name", func.__name__)
                start_time = time.perf_counter()
                try:
                    return func(*args, **kwargs)
                finally:
                    span.set_attribute("function.duration", time.perf_counter() - start_time)

        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            async with async_trading_span(
                name, kind=span_kind, set_status_on_exception=record_exception, **span_attributes
            ) as span:
                span.set_attribute("function.name", func.__name__)
                start_time = time.perf_counter()
                try:
                    return await func(*args, **kwargs)
                finally:
                    span.set_attribute("function.duration", time.perf_counter() - start_time)

        return async_wrapper if inspect.iscoroutinefunction(func) else sync_wrapper

    return decorator
