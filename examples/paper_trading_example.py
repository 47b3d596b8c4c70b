"""
Paper Trading Example

Walks through a short session against static reference prices: sizing a
trade, buying, averaging up, a pending limit order, the pending order sweep
and closing out, printing the portfolio and audit trail along the way.
"""

import asyncio
import json
from decimal import Decimal

from papertrader.domain.entities import OrderRequest, OrderSide, OrderType
from papertrader.domain.exceptions import TradingError
from papertrader.infrastructure.brokers import create_paper_engine
from papertrader.infrastructure.config import get_trading_config
from papertrader.infrastructure.market_data import StaticPriceSource
from papertrader.infrastructure.monitoring import setup_logging


async def main() -> None:
    config = get_trading_config()
    setup_logging(config.log_level, json_format=config.json_logs)

    prices = StaticPriceSource()
    engine = create_paper_engine(config, price_source=prices)

    sizing = await engine.calculate_position_size("AAPL", risk_amount=1000, stop_loss_percent=5)
    print("Sizing:", json.dumps(sizing.to_dict(), indent=2))

    await engine.submit_order(
        OrderRequest("AAPL", OrderSide.BUY, OrderType.MARKET, sizing.suggested_shares)
    )

    prices.set_price("AAPL", Decimal("180.00"))
    await engine.submit_order(OrderRequest("AAPL", OrderSide.BUY, OrderType.MARKET, 50))

    take_profit = await engine.submit_order(
        OrderRequest("AAPL", OrderSide.SELL, OrderType.LIMIT, 50, limit_price=Decimal("195.00"))
    )
    print("Pending:", take_profit)

    prices.set_price("AAPL", Decimal("196.10"))
    for order in await engine.check_pending_orders():
        print("Swept:", order)

    try:
        await engine.submit_order(OrderRequest("TSLA", OrderSide.SELL, OrderType.MARKET, 10))
    except TradingError as e:
        print("Rejected:", json.dumps(e.to_dict()))

    portfolio = await engine.get_portfolio()
    print("Portfolio:", json.dumps(portfolio.to_dict(), indent=2))

    for entry in engine.get_audit_log():
        print(entry.sequence, entry.action, entry.symbol, entry.quantity, entry.price)


if __name__ == "__main__":
    asyncio.run(main())
