"""
Monitoring for the paper trading engine: structured logging and tracing spans.
"""

from .logging import TradingJSONFormatter, setup_logging
from .telemetry import (
    TradingSpanAttributes,
    add_trading_attributes,
    async_trading_span,
    get_current_span,
    trace_trading_operation,
    trading_span,
    trading_tracer,
)

__all__ = [
    "TradingJSONFormatter",
    "TradingSpanAttributes",
    "add_trading_attributes",
    "async_trading_span",
    "get_current_span",
    "setup_logging",
    "trace_trading_operation",
    "trading_span",
    "trading_tracer",
]
