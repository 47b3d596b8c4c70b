"""
Configuration Management - Loads engine settings from the environment
"""

import logging
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from dotenv import load_dotenv

from ..domain.constants import (
    DEFAULT_AUDIT_LOG_MAX_ENTRIES,
    DEFAULT_INITIAL_CASH,
    DEFAULT_MARGIN_MULTIPLIER,
    DEFAULT_ORDER_HISTORY_LIMIT,
)
from ..domain.entities.order import TradingMode

logger = logging.getLogger(__name__)

LOG_FORMATS = ("json", "text")


class ConfigurationError(Exception):
    """Raised when configuration values are missing or invalid."""


def _decimal_env(name: str, default: Decimal) -> Decimal:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return Decimal(raw.strip())
    except InvalidOperation as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


@dataclass
class TradingConfig:
    """Paper trading engine configuration settings"""

    initial_cash: Decimal = DEFAULT_INITIAL_CASH
    margin_multiplier: Decimal = DEFAULT_MARGIN_MULTIPLIER
    audit_log_max_entries: int = DEFAULT_AUDIT_LOG_MAX_ENTRIES
    order_history_limit: int = DEFAULT_ORDER_HISTORY_LIMIT
    trading_mode: str = TradingMode.PAPER.value
    log_level: str = "INFO"
    log_format: str = "json"

    @classmethod
    def from_env(cls, env_file: str | None = None) -> "TradingConfig":
        """Load trading config from environment variables (and a .env file, if any)"""
        load_dotenv(env_file)
        config = cls(
            initial_cash=_decimal_env("INITIAL_CASH", DEFAULT_INITIAL_CASH),
            margin_multiplier=_decimal_env("MARGIN_MULTIPLIER", DEFAULT_MARGIN_MULTIPLIER),
            audit_log_max_entries=_int_env("AUDIT_LOG_MAX_ENTRIES", DEFAULT_AUDIT_LOG_MAX_ENTRIES),
            order_history_limit=_int_env("ORDER_HISTORY_LIMIT", DEFAULT_ORDER_HISTORY_LIMIT),
            trading_mode=os.getenv("TRADING_MODE", TradingMode.PAPER.value).strip().lower(),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
            log_format=os.getenv("LOG_FORMAT", "json").strip().lower(),
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Check values are usable by the engine.

        Raises:
            ConfigurationError: On the first invalid setting
        """
        if self.initial_cash <= 0:
            raise ConfigurationError(f"INITIAL_CASH must be positive, got {self.initial_cash}")
        if self.margin_multiplier < 1:
            raise ConfigurationError(
                f"MARGIN_MULTIPLIER must be at least 1, got {self.margin_multiplier}"
            )
        if self.audit_log_max_entries <= 0:
            raise ConfigurationError(
                f"AUDIT_LOG_MAX_ENTRIES must be positive, got {self.audit_log_max_entries}"
            )
        if self.order_history_limit <= 0:
            raise ConfigurationError(
                f"ORDER_HISTORY_LIMIT must be positive, got {self.order_history_limit}"
            )
        if self.trading_mode != TradingMode.PAPER.value:
            raise ConfigurationError(
                f"Only paper trading is supported, got TRADING_MODE={self.trading_mode!r}"
            )
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(f"LOG_FORMAT must be one of {LOG_FORMATS}, got {self.log_format!r}")

    @property
    def mode(self) -> TradingMode:
        return TradingMode(self.trading_mode)

    @property
    def json_logs(self) -> bool:
        return self.log_format == "json"


# Global configuration instance (lazy-loaded)
_config: TradingConfig | None = None


def get_trading_config() -> TradingConfig:
    """Get or create the process-wide trading configuration"""
    global _config
    if _config is None:
        _config = TradingConfig.from_env()
        logger.info(
            f"Loaded trading config: initial_cash={_config.initial_cash}, "
            f"margin={_config.margin_multiplier}, mode={_config.trading_mode}"
        )
    return _config


def reset_trading_config() -> None:
    """Drop the cached configuration so the next access reloads it"""
    global _config
    _config = None
