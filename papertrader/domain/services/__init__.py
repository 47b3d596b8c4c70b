"""Domain services: the portfolio ledger and the position sizing calculator."""

from .ledger import FillResult, PortfolioLedger
from .position_sizing import PositionSizingResult, calculate_position_size

__all__ = ["FillResult", "PortfolioLedger", "PositionSizingResult", "calculate_position_size"]
