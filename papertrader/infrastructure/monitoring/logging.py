"""
Structured Logging for the Paper Trading Engine

JSON structured logs carrying trading-specific fields (symbol, order id,
operation type) passed through ``extra=`` and the active trace/span ids.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from opentelemetry import trace

TRADING_FIELDS = ("symbol", "order_id", "operation_type", "side", "mode")

_STANDARD_FIELDS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
        *TRADING_FIELDS,
    }
)


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


class TradingJSONFormatter(logging.Formatter):
    """JSON formatter for structured trading logs."""

    def __init__(self, include_extra: bool = True, sort_keys: bool = True) -> None:
        super().__init__()
        self.include_extra = include_extra
        self.sort_keys = sort_keys

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Distributed tracing context
        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            log_entry["trace_id"] = format(span_context.trace_id, "032x")
            log_entry["span_id"] = format(span_context.span_id, "016x")

        trading_fields = {
            name: getattr(record, name)
            for name in TRADING_FIELDS
            if getattr(record, name, None) is not None
        }
        if trading_fields:
            log_entry["trading"] = trading_fields

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        if self.include_extra:
            extra = {
                key: value
                for key, value in record.__dict__.items()
                if key not in _STANDARD_FIELDS and not key.startswith("_")
            }
            if extra:
                log_entry["extra"] = extra

        return json.dumps(log_entry, default=_json_default, sort_keys=self.sort_keys)


def setup_logging(level: str = "INFO", json_format: bool = True) -> None:
    """
    Configure the package logger.

    Args:
        level: Log level name
        json_format: Emit JSON lines when True, plain text otherwise
    """
    handler = logging.StreamHandler(sys.stdout)
    if json_format:
        handler.setFormatter(TradingJSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    package_logger = logging.getLogger("papertrader")
    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(level.upper())
