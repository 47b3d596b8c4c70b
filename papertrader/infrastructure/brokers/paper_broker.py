"""
Paper Trading Engine - Simulated order execution against an in-memory ledger

The engine owns the portfolio ledger, every order it has accepted and the
audit log. Mutating operations (submit, fill, cancel, reset and the pending
order sweep) run one at a time behind a single ``asyncio.Lock``; the lock is
held from price resolution through fill application so two submissions can
never both pass a stale buying power check. Read-only queries take no lock
and return copies built without awaiting.
"""

import asyncio
import logging
from collections import deque
from decimal import Decimal
from typing import Any

from ...application.interfaces import PriceSource
from ...domain.constants import (
    ACTION_ACCOUNT_RESET,
    ACTION_ORDER_CANCELLED,
    ACTION_ORDER_FILLED,
    ACTION_ORDER_PLACED,
    DEFAULT_AUDIT_LOG_MAX_ENTRIES,
    DEFAULT_INITIAL_CASH,
    DEFAULT_MARGIN_MULTIPLIER,
    DEFAULT_ORDER_HISTORY_LIMIT,
)
from ...domain.entities import Order, OrderRequest, OrderSide, Portfolio, Position, TradingMode
from ...domain.exceptions import (
    InsufficientFundsError,
    InvalidOrderError,
    InvalidOrderStateError,
    OrderNotFoundError,
    PositionNotFoundError,
    TradingError,
)
from ...domain.services import (
    FillResult,
    PortfolioLedger,
    PositionSizingResult,
    calculate_position_size,
)
from ...domain.value_objects import round_money, to_decimal
from ..audit import AuditLog, AuditLogEntry
from ..monitoring.telemetry import (
    add_trading_attributes,
    get_current_span,
    trace_trading_operation,
)

logger = logging.getLogger(__name__)


class PaperTradingEngine:
    """
    Paper trading engine with serialized mutations.

    Orders are validated and priced on submission. Market orders, and limit
    orders whose limit the current price already satisfies, fill immediately.
    Everything else stays pending until ``fill_order`` or
    ``check_pending_orders`` fills it, or ``cancel_order`` cancels it.
    """

    def __init__(
        self,
        price_source: PriceSource,
        initial_cash: Decimal | float | int | str = DEFAULT_INITIAL_CASH,
        margin_multiplier: Decimal | float | int | str = DEFAULT_MARGIN_MULTIPLIER,
        mode: TradingMode = TradingMode.PAPER,
        max_audit_entries: int = DEFAULT_AUDIT_LOG_MAX_ENTRIES,
        order_history_limit: int = DEFAULT_ORDER_HISTORY_LIMIT,
    ) -> None:
        if mode != TradingMode.PAPER:
            raise ValueError(f"Only paper trading is supported, got {mode.value}")
        if order_history_limit <= 0:
            raise ValueError(f"Order history limit must be positive, got {order_history_limit}")

        self._price_source = price_source
        self._mode = mode
        self._ledger = PortfolioLedger(initial_cash, margin_multiplier)
        self._audit_log = AuditLog(max_audit_entries, mode)
        self._orders: dict[str, Order] = {}
        self._filled_orders: deque[Order] = deque(maxlen=order_history_limit)
        self._lock = asyncio.Lock()

        logger.info(
            f"Initialized paper trading engine with ${self._ledger.cash} cash, "
            f"${self._ledger.buying_power} buying power"
        )

    # Helpers

    async def _resolve_price(self, symbol: str) -> Decimal:
        """Fetch a quote, rejecting anything that is not a positive finite number."""
        quote = await self._price_source.get_current_price(symbol)
        try:
            price = to_decimal(quote)
        except ValueError as e:
            raise InvalidOrderError("reference_price", f"bad quote for {symbol}: {e}") from e
        if price <= 0:
            raise InvalidOrderError(
                "reference_price", f"quote for {symbol} must be positive, got {price}"
            )
        return price

    def _get_order(self, order_id: str) -> Order:
        order = self._orders.get(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def _check_can_place(self, order: Order, candidate_price: Decimal) -> None:
        if order.side == OrderSide.BUY:
            cost = candidate_price * order.quantity
            available = self._ledger.buying_power
            if cost > available:
                raise InsufficientFundsError(round_money(cost), available)
        else:
            held = self._ledger.position_quantity(order.symbol)
            if held < order.quantity:
                raise PositionNotFoundError(order.symbol, requested=order.quantity, available=held)

    def _execute_fill(self, order: Order, price: Decimal) -> FillResult:
        """Apply the trade to the ledger, then mark the order filled and audit it."""
        result = self._ledger.apply_fill(order.symbol, order.side, order.quantity, price)
        order.fill(result.price)
        self._filled_orders.appendleft(order)

        metadata: dict[str, Any] = {"order_id": order.id, "cash_after": result.cash_after}
        if result.realized_pl is not None:
            metadata["realized_pl"] = result.realized_pl
        self._audit_log.record(
            ACTION_ORDER_FILLED,
            symbol=order.symbol,
            side=order.side,
            quantity=order.quantity,
            price=result.price,
            order_type=order.order_type,
            metadata=metadata,
        )

        logger.info(
            f"Filled order {order.id}: {order.side.value.upper()} {order.quantity} "
            f"{order.symbol} @ {result.price}",
            extra={"symbol": order.symbol, "order_id": order.id, "operation_type": "fill"},
        )
        return result

    @staticmethod
    def _annotate_span(order: Order) -> None:
        add_trading_attributes(
            get_current_span(),
            symbol=order.symbol,
            order_id=order.id,
            order_type=order.order_type,
            order_side=order.side,
            quantity=order.quantity,
            price=order.filled_price,
            mode=order.mode,
            **{"trading.order_status": order.status},
        )

    # Order lifecycle

    @trace_trading_operation("paper_engine.submit_order")
    async def submit_order(self, request: OrderRequest) -> Order:
        """
        Validate, price and place an order, filling it at once when it is marketable.

        Raises:
            InvalidQuantityError: If the quantity is not a positive integer
            InvalidOrderError: If the symbol or a required price is missing or invalid
            InsufficientFundsError: If a buy would cost more than the buying power
            PositionNotFoundError: If a sell exceeds the shares held
        """
        try:
            order = Order.from_request(request, self._mode)
            async with self._lock:
                reference_price = await self._resolve_price(order.symbol)
                self._check_can_place(order, order.execution_price_candidate(reference_price))

                self._orders[order.id] = order
                self._audit_log.record(
                    ACTION_ORDER_PLACED,
                    symbol=order.symbol,
                    side=order.side,
                    quantity=order.quantity,
                    price=order.limit_price if order.limit_price is not None else reference_price,
                    order_type=order.order_type,
                    metadata={"order_id": order.id, "reference_price": reference_price},
                )
                logger.info(
                    f"Placed order {order}",
                    extra={"symbol": order.symbol, "order_id": order.id, "operation_type": "place"},
                )

                if order.fills_on_submit(reference_price):
                    self._execute_fill(order, reference_price)

                self._annotate_span(order)
                return order.copy()
        except TradingError as e:
            logger.warning(
                f"Rejected order for {request.symbol}: {e.message}",
                extra={"symbol": str(request.symbol), "operation_type": "place"},
            )
            raise

    @trace_trading_operation("paper_engine.fill_order")
    async def fill_order(
        self, order_id: str, fill_price: Decimal | float | int | str | None = None
    ) -> Order:
        """
        Fill a pending order at the given price, or at the current price if none is given.

        Raises:
            OrderNotFoundError: If the order id is unknown
            InvalidOrderStateError: If the order is not pending
            InvalidOrderError: If the fill price is not positive
            InsufficientFundsError: If the buy no longer fits the buying power
            PositionNotFoundError: If the sell no longer fits the shares held
        """
        async with self._lock:
            order = self._get_order(order_id)
            if not order.is_pending():
                raise InvalidOrderStateError(order.id, order.status.value, "fill")

            if fill_price is None:
                price = await self._resolve_price(order.symbol)
            else:
                try:
                    price = to_decimal(fill_price)
                except ValueError as e:
                    raise InvalidOrderError("fill_price", str(e)) from e
                if price <= 0:
                    raise InvalidOrderError("fill_price", f"must be positive, got {price}")

            self._execute_fill(order, price)
            self._annotate_span(order)
            return order.copy()

    @trace_trading_operation("paper_engine.cancel_order")
    async def cancel_order(self, order_id: str) -> Order:
        """
        Cancel a pending order. Has no ledger effect.

        Raises:
            OrderNotFoundError: If the order id is unknown
            InvalidOrderStateError: If the order is not pending
        """
        async with self._lock:
            order = self._get_order(order_id)
            order.cancel()
            self._audit_log.record(
                ACTION_ORDER_CANCELLED,
                symbol=order.symbol,
                side=order.side,
                quantity=order.quantity,
                order_type=order.order_type,
                metadata={"order_id": order.id},
            )
            logger.info(
                f"Cancelled order {order.id}",
                extra={"symbol": order.symbol, "order_id": order.id, "operation_type": "cancel"},
            )
            self._annotate_span(order)
            return order.copy()

    @trace_trading_operation("paper_engine.check_pending_orders")
    async def check_pending_orders(self) -> list[Order]:
        """
        Fill every pending order whose trigger conditions hold at the current price.

        Orders the ledger cannot take (funds or shares no longer available) stay
        pending and are reported at WARNING.

        Returns:
            Copies of the orders filled by this sweep
        """
        async with self._lock:
            pending = [order for order in self._orders.values() if order.is_pending()]
            if not pending:
                return []

            symbols = sorted({order.symbol for order in pending})
            quotes = await asyncio.gather(*(self._resolve_price(s) for s in symbols))
            prices = dict(zip(symbols, quotes, strict=True))

            filled: list[Order] = []
            for order in pending:
                reference_price = prices[order.symbol]
                if not order.should_fill(reference_price):
                    continue
                try:
                    self._execute_fill(order, reference_price)
                except (InsufficientFundsError, PositionNotFoundError) as e:
                    logger.warning(
                        f"Pending order {order.id} triggered but not filled: {e.message}",
                        extra={"symbol": order.symbol, "order_id": order.id, "operation_type": "sweep"},
                    )
                    continue
                filled.append(order.copy())

            if filled:
                logger.info(f"Pending order sweep filled {len(filled)} of {len(pending)} orders")
            return filled

    # Account

    @trace_trading_operation("paper_engine.reset")
    async def reset(self, new_cash: Decimal | float | int | str | None = None) -> None:
        """
        Clear positions, orders and the audit log, then restore cash.

        The restored cash becomes the baseline for total P/L. Exactly one
        ``account.reset`` entry is left in the audit log.
        """
        async with self._lock:
            cash = self._ledger.reset(new_cash)
            self._orders.clear()
            self._filled_orders.clear()
            self._audit_log.clear()
            self._audit_log.record(
                ACTION_ACCOUNT_RESET,
                metadata={"cash": cash, "buying_power": self._ledger.buying_power},
            )
            logger.info(
                f"Account reset: cash ${cash}, buying power ${self._ledger.buying_power}",
                extra={"operation_type": "reset"},
            )

    @trace_trading_operation("paper_engine.refresh_market_prices")
    async def refresh_market_prices(self) -> int:
        """
        Re-price every open position from the price source. Cash is untouched.

        Runs without the lock: quotes are awaited first, then applied in one step.
        Positions closed, or closed and reopened, while quotes were in flight
        are skipped.

        Returns:
            Number of positions re-priced
        """
        generations = self._ledger.open_generations()
        symbols = list(generations)
        if not symbols:
            return 0

        quotes = await asyncio.gather(*(self._resolve_price(s) for s in symbols))
        updated = self._ledger.update_market_prices(
            dict(zip(symbols, quotes, strict=True)), generations=generations
        )
        logger.debug(f"Refreshed market prices for {updated} positions")
        return updated

    # Queries

    async def get_portfolio(self) -> Portfolio:
        """Refresh market prices and return a portfolio snapshot."""
        await self.refresh_market_prices()
        return self._ledger.snapshot()

    async def get_account_value(self) -> Decimal:
        portfolio = await self.get_portfolio()
        return portfolio.total_value

    def get_position(self, symbol: str) -> Position | None:
        return self._ledger.get_position(symbol)

    def get_order(self, order_id: str) -> Order:
        return self._get_order(order_id).copy()

    def get_orders(self) -> list[Order]:
        """Get all orders in placement order"""
        return [order.copy() for order in self._orders.values()]

    def get_order_history(self, symbol: str | None = None) -> list[Order]:
        """Get orders in placement order, optionally for one symbol"""
        if symbol is None:
            return self.get_orders()
        key = symbol.strip().upper()
        return [order.copy() for order in self._orders.values() if order.symbol == key]

    def get_pending_orders(self) -> list[Order]:
        return [order.copy() for order in self._orders.values() if order.is_pending()]

    def get_filled_orders(self) -> list[Order]:
        """Get recently filled orders, newest first"""
        return [order.copy() for order in self._filled_orders]

    def get_audit_log(self) -> list[AuditLogEntry]:
        """Get audit entries, oldest first"""
        return self._audit_log.entries()

    def get_mode(self) -> TradingMode:
        return self._mode

    @property
    def cash(self) -> Decimal:
        return self._ledger.cash

    @property
    def buying_power(self) -> Decimal:
        return self._ledger.buying_power

    @trace_trading_operation("paper_engine.calculate_position_size")
    async def calculate_position_size(
        self,
        symbol: str,
        risk_amount: Decimal | float | int | str,
        stop_loss_percent: Decimal | float | int | str,
    ) -> PositionSizingResult:
        """Size a position for a symbol at its current price against current buying power."""
        current_price = await self._resolve_price(symbol.strip().upper())
        return calculate_position_size(
            current_price, risk_amount, stop_loss_percent, self._ledger.buying_power
        )
