"""Global pytest configuration and fixtures."""

# Standard library imports
from decimal import Decimal
from pathlib import Path
from unittest.mock import AsyncMock

# Load test environment variables
from dotenv import load_dotenv

test_env_path = Path(__file__).parent.parent / ".env.test"
if test_env_path.exists():
    load_dotenv(test_env_path, override=True)

# Third-party imports
import pytest
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

# Local imports
from papertrader.domain.entities import OrderRequest, OrderSide, OrderType
from papertrader.infrastructure.brokers import PaperTradingEngine
from papertrader.infrastructure.config import reset_trading_config
from papertrader.infrastructure.market_data import StaticPriceSource


@pytest.fixture(autouse=True)
def _fresh_trading_config():
    """Every test starts without a cached process-wide configuration."""
    reset_trading_config()
    yield
    reset_trading_config()


@pytest.fixture(scope="session")
def _session_span_exporter() -> InMemorySpanExporter:
    """Install an SDK tracer provider once per session, recording spans in memory."""
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    trace.set_tracer_provider(provider)
    return exporter


@pytest.fixture
def span_exporter(_session_span_exporter: InMemorySpanExporter) -> InMemorySpanExporter:
    """Finished spans recorded during the current test only."""
    _session_span_exporter.clear()
    return _session_span_exporter


@pytest.fixture
def price_source() -> StaticPriceSource:
    """Static quotes seeded with the reference price table."""
    return StaticPriceSource()


@pytest.fixture
def engine(price_source: StaticPriceSource) -> PaperTradingEngine:
    """Engine with $100,000 cash and 2x margin."""
    return PaperTradingEngine(price_source=price_source, initial_cash=Decimal("100000"))


@pytest.fixture
def mock_price_source() -> AsyncMock:
    """Price source whose quotes and calls can be inspected."""
    source = AsyncMock()
    source.get_current_price.return_value = Decimal("178.72")
    return source


@pytest.fixture
def mock_engine(mock_price_source: AsyncMock) -> PaperTradingEngine:
    return PaperTradingEngine(price_source=mock_price_source, initial_cash=Decimal("100000"))


def market_buy(symbol: str = "AAPL", quantity=100) -> OrderRequest:
    return OrderRequest(symbol, OrderSide.BUY, OrderType.MARKET, quantity)


def market_sell(symbol: str = "AAPL", quantity=100) -> OrderRequest:
    return OrderRequest(symbol, OrderSide.SELL, OrderType.MARKET, quantity)


@pytest.fixture
def buy_request():
    """Factory for market buy requests."""
    return market_buy


@pytest.fixture
def sell_request():
    """Factory for market sell requests."""
    return market_sell
