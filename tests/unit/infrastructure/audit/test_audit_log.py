"""Tests for the bounded audit log."""

from decimal import Decimal
from types import MappingProxyType

import pytest

from papertrader.domain.entities import OrderSide, OrderType, TradingMode
from papertrader.infrastructure.audit import AuditLog, AuditLogEntry


class TestAuditLog:
    """Append-only, oldest-first ring buffer."""

    def test_record_returns_entry(self):
        log = AuditLog()
        entry = log.record(
            "order.placed",
            symbol="AAPL",
            side=OrderSide.BUY,
            quantity=100,
            price=Decimal("178.72"),
            order_type=OrderType.MARKET,
            metadata={"order_id": "order-1"},
        )

        assert entry.action == "order.placed"
        assert entry.mode == TradingMode.PAPER
        assert entry.sequence == 1
        assert entry.id.startswith("audit-")
        assert log.entries() == [entry]

    def test_oldest_first(self):
        log = AuditLog()
        for action in ("a", "b", "c"):
            log.record(action)

        assert [entry.action for entry in log.entries()] == ["a", "b", "c"]

    def test_timestamps_strictly_increase(self):
        log = AuditLog()
        for _ in range(50):
            log.record("tick")

        entries = log.entries()
        assert all(
            earlier.timestamp < later.timestamp for earlier, later in zip(entries, entries[1:])
        )
        assert [e.sequence for e in entries] == list(range(1, 51))

    def test_bounded_discards_oldest(self):
        log = AuditLog(max_entries=3)
        for index in range(5):
            log.record(f"action-{index}")

        assert len(log) == 3
        assert [entry.action for entry in log.entries()] == ["action-2", "action-3", "action-4"]

    def test_max_entries_reports_capacity(self):
        log = AuditLog(max_entries=5)
        for index in range(7):
            log.record(f"action-{index}")

        assert log.max_entries == 5
        assert len(log) == 5

    def test_entries_returns_a_copy(self):
        log = AuditLog()
        log.record("a")
        entries = log.entries()
        entries.clear()

        assert len(log) == 1

    def test_clear(self):
        log = AuditLog()
        log.record("a")
        log.clear()

        assert log.entries() == []

    def test_rejects_non_positive_size(self):
        with pytest.raises(ValueError):
            AuditLog(max_entries=0)


class TestAuditLogEntry:
    def test_entry_is_frozen(self):
        entry = AuditLog().record("a", metadata={"k": "v"})

        with pytest.raises(AttributeError):
            entry.action = "b"
        with pytest.raises(TypeError):
            entry.metadata["k"] = "changed"
        assert isinstance(entry.metadata, MappingProxyType)

    def test_to_dict(self):
        entry = AuditLog().record(
            "order.filled",
            symbol="AAPL",
            side=OrderSide.SELL,
            quantity=150,
            price=Decimal("185.00"),
            order_type=OrderType.MARKET,
            metadata={"realized_pl": Decimal("878.00")},
        )

        data = entry.to_dict()

        assert data["action"] == "order.filled"
        assert data["side"] == "sell"
        assert data["price"] == "185.00"
        assert data["order_type"] == "market"
        assert data["mode"] == "paper"
        assert data["metadata"] == {"realized_pl": "878.00"}

    def test_action_required(self):
        with pytest.raises(ValueError):
            AuditLogEntry(sequence=1, timestamp=None, action="", mode=TradingMode.PAPER)
