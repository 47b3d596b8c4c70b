"""Paper trading engine and its factory."""

from .broker_factory import create_paper_engine
from .paper_broker import PaperTradingEngine

__all__ = ["PaperTradingEngine", "create_paper_engine"]
