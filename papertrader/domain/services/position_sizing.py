"""Position sizing calculator.

Implements fixed-risk position sizing: the number of shares is the amount the
trader is willing to lose divided by the loss per share at the stop, capped by
what the available buying power can pay for.

Formula:
    stop_loss_price = current_price x (1 - stop_loss_percent / 100)
    risk_per_share  = current_price - stop_loss_price
    suggested       = floor(risk_amount / risk_per_share)
    max_shares      = floor(buying_power / current_price)
    shares          = min(suggested, max_shares)

Example:
    >>> result = calculate_position_size(Decimal("50"), Decimal("200"), Decimal("4"), Decimal("10000"))
    >>> # Risk per share: $50 x 4% = $2
    >>> # Suggested: $200 / $2 = 100 shares, max by buying power: 200 shares
    >>> assert result.suggested_shares == 100

The calculator reads no engine state and has no side effects.
"""

# Standard library imports
from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from typing import Any

from ..constants import RISK_REWARD_RATIO
from ..value_objects import round_money, to_decimal


@dataclass(frozen=True)
class PositionSizingResult:
    """Suggested trade size and the risk figures behind it."""

    suggested_shares: int
    max_shares: int
    risk_amount: Decimal
    stop_loss_price: Decimal
    max_loss: Decimal
    risk_reward_ratio: Decimal
    target_price: Decimal

    @classmethod
    def zero(cls) -> "PositionSizingResult":
        return cls(
            suggested_shares=0,
            max_shares=0,
            risk_amount=Decimal("0"),
            stop_loss_price=Decimal("0"),
            max_loss=Decimal("0"),
            risk_reward_ratio=Decimal("0"),
            target_price=Decimal("0"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "suggested_shares": self.suggested_shares,
            "max_shares": self.max_shares,
            "risk_amount": str(self.risk_amount),
            "stop_loss_price": str(self.stop_loss_price),
            "max_loss": str(self.max_loss),
            "risk_reward_ratio": str(self.risk_reward_ratio),
            "target_price": str(self.target_price),
        }


def _floor_shares(value: Decimal) -> int:
    return max(0, int(value.to_integral_value(rounding=ROUND_FLOOR)))


def calculate_position_size(
    current_price: Decimal | float | int | str,
    risk_amount: Decimal | float | int | str,
    stop_loss_percent: Decimal | float | int | str,
    buying_power: Decimal | float | int | str,
) -> PositionSizingResult:
    """Calculate a bounded share suggestion from a risk budget.

    Args:
        current_price: Planned entry price
        risk_amount: Maximum acceptable loss in dollars
        stop_loss_percent: Stop distance below entry, in percent (5 means 5%)
        buying_power: Capital available for the purchase

    Returns:
        PositionSizingResult; all zeros when the stop distance is not positive

    Raises:
        ValueError: If current_price is not positive
    """
    price = to_decimal(current_price)
    if price <= 0:
        raise ValueError(f"Current price must be positive, got {price}")

    risk = to_decimal(risk_amount)
    stop_percent = to_decimal(stop_loss_percent)
    power = to_decimal(buying_power)

    stop_loss_price = price * (1 - stop_percent / 100)
    risk_per_share = price - stop_loss_price
    if risk_per_share <= 0:
        return PositionSizingResult.zero()

    suggested = _floor_shares(risk / risk_per_share)
    max_shares = _floor_shares(power / price)
    shares = min(suggested, max_shares)

    return PositionSizingResult(
        suggested_shares=shares,
        max_shares=max_shares,
        risk_amount=risk,
        stop_loss_price=round_money(stop_loss_price),
        max_loss=round_money(risk_per_share * shares),
        risk_reward_ratio=RISK_REWARD_RATIO,
        target_price=round_money(price + risk_per_share * RISK_REWARD_RATIO),
    )
