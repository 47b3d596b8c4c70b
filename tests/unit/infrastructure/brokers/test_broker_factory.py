"""Tests for building engines from configuration."""

from decimal import Decimal

import pytest

from papertrader.domain.entities import TradingMode
from papertrader.infrastructure.brokers import PaperTradingEngine, create_paper_engine
from papertrader.infrastructure.config import ConfigurationError, TradingConfig
from papertrader.infrastructure.market_data import StaticPriceSource


class TestCreatePaperEngine:
    def test_from_explicit_config(self):
        config = TradingConfig(initial_cash=Decimal("25000"), margin_multiplier=Decimal("1"))

        engine = create_paper_engine(config)

        assert isinstance(engine, PaperTradingEngine)
        assert engine.cash == Decimal("25000.00")
        assert engine.buying_power == Decimal("25000.00")
        assert engine.get_mode() == TradingMode.PAPER

    @pytest.mark.asyncio
    async def test_uses_supplied_price_source(self, buy_request):
        source = StaticPriceSource({"ABC": "10"})
        engine = create_paper_engine(TradingConfig(), price_source=source)

        order = await engine.submit_order(buy_request("ABC", 5))

        assert order.filled_price == Decimal("10")

    @pytest.mark.asyncio
    async def test_default_price_source(self, buy_request):
        engine = create_paper_engine(TradingConfig())

        order = await engine.submit_order(buy_request("NVDA", 1))

        assert order.filled_price == Decimal("495.22")

    def test_applies_history_limits(self):
        engine = create_paper_engine(TradingConfig(audit_log_max_entries=5, order_history_limit=3))

        assert engine._audit_log.max_entries == 5
        assert engine._filled_orders.maxlen == 3

    def test_invalid_config(self):
        with pytest.raises(ConfigurationError):
            create_paper_engine(TradingConfig(trading_mode="live"))

    def test_global_config(self, monkeypatch):
        monkeypatch.setenv("INITIAL_CASH", "60000")

        engine = create_paper_engine()

        assert engine.cash == Decimal("60000.00")
