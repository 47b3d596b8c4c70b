"""
Bounded append-only audit log.

Entries are kept oldest-first. When the retained count reaches the configured
maximum, appending discards the oldest entry. Timestamps and sequence numbers
are strictly increasing, even when the wall clock does not advance between two
appends.
"""

import logging
from collections import deque
from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from typing import Any

from ...domain.constants import DEFAULT_AUDIT_LOG_MAX_ENTRIES
from ...domain.entities.order import OrderSide, OrderType, TradingMode
from .events import AuditLogEntry

logger = logging.getLogger(__name__)

_TICK = timedelta(microseconds=1)


class AuditLog:
    """Ring buffer of audit entries owned by one engine."""

    def __init__(
        self,
        max_entries: int = DEFAULT_AUDIT_LOG_MAX_ENTRIES,
        mode: TradingMode = TradingMode.PAPER,
    ) -> None:
        if max_entries <= 0:
            raise ValueError(f"Audit log size must be positive, got {max_entries}")

        self._max_entries = max_entries
        self._entries: deque[AuditLogEntry] = deque(maxlen=max_entries)
        self._mode = mode
        self._sequence = 0
        self._last_timestamp: datetime | None = None

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def _next_timestamp(self) -> datetime:
        now = datetime.now(UTC)
        if self._last_timestamp is not None and now <= self._last_timestamp:
            now = self._last_timestamp + _TICK
        self._last_timestamp = now
        return now

    def record(
        self,
        action: str,
        *,
        symbol: str | None = None,
        side: OrderSide | None = None,
        quantity: int | None = None,
        price: Decimal | None = None,
        order_type: OrderType | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> AuditLogEntry:
        """Append one entry and return it."""
        self._sequence += 1
        entry = AuditLogEntry(
            sequence=self._sequence,
            timestamp=self._next_timestamp(),
            action=action,
            mode=self._mode,
            symbol=symbol,
            side=side,
            quantity=quantity,
            price=price,
            order_type=order_type,
            metadata=metadata or {},
        )

        if len(self._entries) == self.max_entries:
            logger.debug(f"Audit log at capacity {self.max_entries}, discarding oldest entry")
        self._entries.append(entry)
        return entry

    def entries(self) -> list[AuditLogEntry]:
        """Get all retained entries, oldest first"""
        return list(self._entries)

    def clear(self) -> None:
        """Drop all entries. Only used as part of a full account reset."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
