"""Domain entities with business logic."""

from .order import Order, OrderRequest, OrderSide, OrderStatus, OrderType, TradingMode
from .portfolio import Portfolio
from .position import Position

__all__ = [
    "Order",
    "OrderRequest",
    "OrderSide",
    "OrderStatus",
    "OrderType",
    "TradingMode",
    "Position",
    "Portfolio",
]
