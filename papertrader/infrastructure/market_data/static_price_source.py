"""
In-memory price source for paper trading.

Quotes come from a fixed reference table that callers can update with
``set_price``. Lookups are deterministic: a symbol without a quote raises
``PriceNotAvailableError`` rather than inventing a price.
"""

import logging
from collections.abc import Mapping
from decimal import Decimal

from ...domain.value_objects import Symbol, to_decimal

logger = logging.getLogger(__name__)

DEFAULT_PRICES: Mapping[str, Decimal] = {
    "AAPL": Decimal("178.72"),
    "MSFT": Decimal("378.91"),
    "GOOGL": Decimal("141.80"),
    "AMZN": Decimal("178.25"),
    "NVDA": Decimal("495.22"),
    "META": Decimal("505.67"),
    "TSLA": Decimal("248.50"),
    "JPM": Decimal("195.42"),
}


class PriceNotAvailableError(Exception):
    """Raised when no quote is available for a symbol."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"No price available for symbol: {symbol}")
        self.symbol = symbol


class StaticPriceSource:
    """Price source backed by an in-memory quote table."""

    def __init__(self, prices: Mapping[str, Decimal | float | int | str] | None = None) -> None:
        self._prices: dict[str, Decimal] = {}
        for symbol, price in (DEFAULT_PRICES if prices is None else prices).items():
            self.set_price(symbol, price)

    def set_price(self, symbol: str, price: Decimal | float | int | str) -> None:
        """Set or replace the quote for a symbol."""
        value = to_decimal(price)
        if value <= 0:
            raise ValueError(f"Price must be positive, got {value}")
        self._prices[Symbol(symbol).value] = value
        logger.debug(f"Quote set: {symbol.upper()} @ {value}")

    def remove_price(self, symbol: str) -> None:
        self._prices.pop(Symbol(symbol).value, None)

    def symbols(self) -> list[str]:
        return sorted(self._prices)

    async def get_current_price(self, symbol: str) -> Decimal:
        """Get the current quote for a symbol.

        Raises:
            PriceNotAvailableError: If the symbol has no quote
        """
        key = symbol.strip().upper()
        try:
            return self._prices[key]
        except KeyError:
            raise PriceNotAvailableError(key) from None
