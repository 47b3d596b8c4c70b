"""Tests for the in-memory price source."""

from decimal import Decimal

import pytest

from papertrader.application.interfaces import PriceSource
from papertrader.infrastructure.market_data import (
    DEFAULT_PRICES,
    PriceNotAvailableError,
    StaticPriceSource,
)


class TestStaticPriceSource:
    @pytest.mark.asyncio
    async def test_reference_prices(self):
        source = StaticPriceSource()

        assert await source.get_current_price("AAPL") == Decimal("178.72")
        assert await source.get_current_price("jpm") == Decimal("195.42")
        assert source.symbols() == sorted(DEFAULT_PRICES)

    @pytest.mark.asyncio
    async def test_unknown_symbol_raises(self):
        source = StaticPriceSource()

        with pytest.raises(PriceNotAvailableError) as exc_info:
            await source.get_current_price("ZZZZ")

        assert exc_info.value.symbol == "ZZZZ"

    @pytest.mark.asyncio
    async def test_set_price(self):
        source = StaticPriceSource({})
        source.set_price("abc", 12.5)

        assert await source.get_current_price("ABC") == Decimal("12.5")

    @pytest.mark.asyncio
    async def test_remove_price(self):
        source = StaticPriceSource()
        source.remove_price("AAPL")

        with pytest.raises(PriceNotAvailableError):
            await source.get_current_price("AAPL")

    def test_rejects_non_positive_price(self):
        with pytest.raises(ValueError):
            StaticPriceSource().set_price("AAPL", 0)

    def test_satisfies_price_source_protocol(self):
        assert isinstance(StaticPriceSource(), PriceSource)
