"""Domain constants shared by the ledger, the sizing calculator and the engine."""

from decimal import Decimal

# Buying power is this multiple of settled cash
DEFAULT_MARGIN_MULTIPLIER = Decimal("2")
DEFAULT_INITIAL_CASH = Decimal("100000")

# Position sizing
RISK_REWARD_RATIO = Decimal("2")

# Retention
DEFAULT_AUDIT_LOG_MAX_ENTRIES = 1000
DEFAULT_ORDER_HISTORY_LIMIT = 100

# Audit actions
ACTION_ORDER_PLACED = "order.placed"
ACTION_ORDER_FILLED = "order.filled"
ACTION_ORDER_CANCELLED = "order.cancelled"
ACTION_ACCOUNT_RESET = "account.reset"
