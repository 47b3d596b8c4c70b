"""Portfolio Ledger domain service.

The ledger owns cash, buying power and open positions. ``apply_fill`` is its
single mutation entry point for trades: it validates everything first and only
then changes state, so a fill is applied completely or not at all.

Buying power is never tracked independently. It is always
``margin_multiplier x cash``, recomputed from cash after every change.
"""

# Standard library imports
from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from ..constants import DEFAULT_INITIAL_CASH, DEFAULT_MARGIN_MULTIPLIER
from ..entities.order import OrderSide
from ..entities.portfolio import Portfolio
from ..entities.position import Position
from ..exceptions import InsufficientFundsError, InvalidOrderError, PositionNotFoundError
from ..value_objects import round_money, round_percent, to_decimal, to_share_quantity


@dataclass(frozen=True)
class FillResult:
    """Outcome of applying one fill to the ledger."""

    symbol: str
    side: OrderSide
    quantity: int
    price: Decimal
    gross_amount: Decimal
    cash_after: Decimal
    buying_power_after: Decimal
    position_quantity: int
    realized_pl: Decimal | None = None

    @property
    def position_closed(self) -> bool:
        return self.position_quantity == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "symbol": self.symbol,
            "side": self.side.value,
            "quantity": self.quantity,
            "price": str(self.price),
            "gross_amount": str(self.gross_amount),
            "cash_after": str(self.cash_after),
            "buying_power_after": str(self.buying_power_after),
            "position_quantity": self.position_quantity,
            "realized_pl": str(self.realized_pl) if self.realized_pl is not None else None,
        }


class PortfolioLedger:
    """Cash, buying power and per-symbol positions for one engine."""

    def __init__(
        self,
        initial_cash: Decimal | float | int | str = DEFAULT_INITIAL_CASH,
        margin_multiplier: Decimal | float | int | str = DEFAULT_MARGIN_MULTIPLIER,
    ) -> None:
        margin = to_decimal(margin_multiplier)
        if margin < 1:
            raise ValueError(f"Margin multiplier must be at least 1, got {margin}")

        self._margin_multiplier = margin
        self._configured_cash = self._validate_cash(initial_cash)
        self._initial_cash = self._configured_cash
        self._cash = self._configured_cash
        self._positions: dict[str, Position] = {}
        self._generations: dict[str, int] = {}
        self._opens = 0

    @staticmethod
    def _validate_cash(amount: Decimal | float | int | str) -> Decimal:
        cash = round_money(amount)
        if cash <= 0:
            raise ValueError(f"Starting cash must be positive, got {cash}")
        return cash

    # Balances

    @property
    def cash(self) -> Decimal:
        return self._cash

    @property
    def buying_power(self) -> Decimal:
        return round_money(self._cash * self._margin_multiplier)

    @property
    def initial_cash(self) -> Decimal:
        return self._initial_cash

    @property
    def margin_multiplier(self) -> Decimal:
        return self._margin_multiplier

    # Fill application

    def apply_fill(
        self,
        symbol: str,
        side: OrderSide,
        quantity: int,
        price: Decimal | float | int | str,
    ) -> FillResult:
        """Apply one executed trade to cash, buying power and positions.

        Raises:
            InvalidQuantityError: If quantity is not a positive integer
            InvalidOrderError: If price is not positive
            InsufficientFundsError: If a buy costs more than current buying power
            PositionNotFoundError: If a sell exceeds the shares held
        """
        symbol = symbol.upper()
        quantity = to_share_quantity(quantity)
        fill_price = to_decimal(price)
        if fill_price <= 0:
            raise InvalidOrderError("fill_price", f"must be positive, got {fill_price}")

        gross = fill_price * quantity
        realized: Decimal | None = None

        if side == OrderSide.BUY:
            available = self.buying_power
            if gross > available:
                raise InsufficientFundsError(round_money(gross), available)

            self._cash = round_money(self._cash - gross)
            position = self._positions.get(symbol)
            if position is None:
                position = Position.open_position(symbol, quantity, fill_price)
                self._positions[symbol] = position
                self._opens += 1
                self._generations[symbol] = self._opens
            else:
                position.add_to_position(quantity, fill_price)
                position.update_market_price(fill_price)
            remaining = position.quantity
        else:
            position = self._positions.get(symbol)
            held = position.quantity if position else 0
            if position is None or held < quantity:
                raise PositionNotFoundError(symbol, requested=quantity, available=held)

            self._cash = round_money(self._cash + gross)
            realized = round_money(position.reduce_position(quantity, fill_price))
            remaining = position.quantity
            if position.is_closed():
                del self._positions[symbol]
                del self._generations[symbol]
            else:
                position.update_market_price(fill_price)

        return FillResult(
            symbol=symbol,
            side=side,
            quantity=quantity,
            price=fill_price,
            gross_amount=round_money(gross),
            cash_after=self._cash,
            buying_power_after=self.buying_power,
            position_quantity=remaining,
            realized_pl=realized,
        )

    # Market data

    def update_market_prices(
        self,
        prices: dict[str, Decimal],
        generations: dict[str, int] | None = None,
    ) -> int:
        """Mark open positions to the given prices. Symbols without a position are skipped.

        Args:
            prices: Quote per symbol
            generations: Optional open generation per symbol, taken when the quotes
                were requested; a position reopened since then is skipped

        Returns:
            Number of positions updated
        """
        updated = 0
        for symbol, price in prices.items():
            key = symbol.upper()
            position = self._positions.get(key)
            if position is None:
                continue
            if generations is not None and generations.get(key) != self._generations.get(key):
                continue
            position.update_market_price(to_decimal(price))
            updated += 1
        return updated

    # Queries

    def get_position(self, symbol: str) -> Position | None:
        """Get a copy of the open position for a symbol"""
        position = self._positions.get(symbol.upper())
        return position.copy() if position else None

    def position_quantity(self, symbol: str) -> int:
        position = self._positions.get(symbol.upper())
        return position.quantity if position else 0

    def symbols(self) -> list[str]:
        return list(self._positions)

    def open_generations(self) -> dict[str, int]:
        """Get a counter per open position that changes whenever the symbol is reopened"""
        return dict(self._generations)

    def snapshot(self) -> Portfolio:
        """Build a point-in-time portfolio view with derived totals."""
        positions = tuple(p.copy() for p in self._positions.values())
        total_value = round_money(self._cash + sum((p.market_value for p in positions), Decimal("0")))
        total_pl = round_money(total_value - self._initial_cash)
        total_pl_percent = round_percent(total_pl / self._initial_cash * 100)

        return Portfolio(
            cash=self._cash,
            buying_power=self.buying_power,
            positions=positions,
            total_value=total_value,
            total_pl=total_pl,
            total_pl_percent=total_pl_percent,
            initial_cash=self._initial_cash,
            as_of=datetime.now(UTC),
        )

    # Reset

    def reset(self, new_cash: Decimal | float | int | str | None = None) -> Decimal:
        """Clear all positions and restore cash; the new cash becomes the P/L baseline.

        Returns:
            The cash balance after reset
        """
        cash = self._configured_cash if new_cash is None else self._validate_cash(new_cash)
        self._positions.clear()
        self._generations.clear()
        self._cash = cash
        self._initial_cash = cash
        return cash
