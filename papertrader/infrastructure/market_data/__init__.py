"""Market data adapters implementing the PriceSource protocol."""

from .static_price_source import DEFAULT_PRICES, PriceNotAvailableError, StaticPriceSource

__all__ = ["DEFAULT_PRICES", "PriceNotAvailableError", "StaticPriceSource"]
