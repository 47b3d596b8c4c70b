"""
Broker Factory - Builds paper trading engines from configuration
"""

import logging

from ...application.interfaces import PriceSource
from ..config import TradingConfig, get_trading_config
from ..market_data import StaticPriceSource
from .paper_broker import PaperTradingEngine

logger = logging.getLogger(__name__)


def create_paper_engine(
    config: TradingConfig | None = None, price_source: PriceSource | None = None
) -> PaperTradingEngine:
    """
    Create a paper trading engine.

    Args:
        config: Engine settings; the process-wide configuration when omitted
        price_source: Quote provider; a StaticPriceSource when omitted

    Returns:
        A new engine owning its own ledger, orders and audit log
    """
    config = config or get_trading_config()
    config.validate()

    if price_source is None:
        price_source = StaticPriceSource()
        logger.info("No price source supplied, using static reference prices")

    return PaperTradingEngine(
        price_source=price_source,
        initial_cash=config.initial_cash,
        margin_multiplier=config.margin_multiplier,
        mode=config.mode,
        max_audit_entries=config.audit_log_max_entries,
        order_history_limit=config.order_history_limit,
    )
