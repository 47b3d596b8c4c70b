"""
Price Source Interface

The only capability the engine consumes from market data: given a symbol,
asynchronously return a current reference price. No staleness bound is
assumed; every call may return a different price. Failures are raised to the
caller unchanged.
"""

# Standard library imports
from abc import abstractmethod
from decimal import Decimal
from typing import Protocol, runtime_checkable


@runtime_checkable
class PriceSource(Protocol):
    """Asynchronous provider of current reference prices."""

    @abstractmethod
    async def get_current_price(self, symbol: str) -> Decimal:
        """
        Get the current reference price for a symbol.

        Args:
            symbol: Uppercase ticker symbol

        Returns:
            Current price, strictly positive
        """
        ...
