"""Tests for structured JSON logging."""

import json
import logging
import sys
from decimal import Decimal

from opentelemetry.trace import NonRecordingSpan, SpanContext, TraceFlags, use_span

from papertrader.infrastructure.monitoring import TradingJSONFormatter, setup_logging


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="papertrader.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="Filled order %s",
        args=("order-1",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestTradingJSONFormatter:
    def test_basic_fields(self):
        payload = json.loads(TradingJSONFormatter().format(make_record()))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "papertrader.test"
        assert payload["message"] == "Filled order order-1"
        assert "trading" not in payload
        assert "trace_id" not in payload

    def test_trading_fields(self):
        record = make_record(symbol="AAPL", order_id="order-1", operation_type="fill")

        payload = json.loads(TradingJSONFormatter().format(record))

        assert payload["trading"] == {
            "symbol": "AAPL",
            "order_id": "order-1",
            "operation_type": "fill",
        }

    def test_extra_fields_serialize_decimals(self):
        record = make_record(cash_after=Decimal("82128.00"))

        payload = json.loads(TradingJSONFormatter().format(record))

        assert payload["extra"] == {"cash_after": 82128.0}

    def test_trace_context(self):
        context = SpanContext(
            trace_id=0x1234,
            span_id=0x42,
            is_remote=False,
            trace_flags=TraceFlags(TraceFlags.SAMPLED),
        )

        with use_span(NonRecordingSpan(context)):
            payload = json.loads(TradingJSONFormatter().format(make_record()))

        assert payload["trace_id"] == format(0x1234, "032x")
        assert payload["span_id"] == format(0x42, "016x")

    def test_exception_info(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = make_record()
            record.exc_info = sys.exc_info()

        payload = json.loads(TradingJSONFormatter().format(record))

        assert payload["exception"]["type"] == "ValueError"
        assert payload["exception"]["message"] == "boom"


class TestSetupLogging:
    def test_json_handler(self):
        setup_logging("debug", json_format=True)
        package_logger = logging.getLogger("papertrader")

        assert package_logger.level == logging.DEBUG
        assert len(package_logger.handlers) == 1
        assert isinstance(package_logger.handlers[0].formatter, TradingJSONFormatter)

    def test_text_handler_replaces_previous(self):
        setup_logging("INFO", json_format=True)
        setup_logging("WARNING", json_format=False)
        package_logger = logging.getLogger("papertrader")

        assert len(package_logger.handlers) == 1
        assert not isinstance(package_logger.handlers[0].formatter, TradingJSONFormatter)
        assert package_logger.level == logging.WARNING
