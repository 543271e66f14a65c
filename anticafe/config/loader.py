"""
Configuration management and loading.

Handles venue settings read from an optional YAML file.
"""

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from anticafe.core.pricing import DEFAULT_PRICE_PER_MINUTE
from anticafe.core.tables import DEFAULT_TABLE_COUNT

DEFAULT_CURRENCY = "RUB"
DEFAULT_LOG_LEVEL = "WARNING"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class PricingConfig:
    """Billing rate and the currency label used for display."""
    price_per_minute: float = DEFAULT_PRICE_PER_MINUTE
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self):
        """Validate price is finite and non-negative and currency is set."""
        if not math.isfinite(self.price_per_minute):
            raise ValueError("price_per_minute must be a finite number")
        if self.price_per_minute < 0:
            raise ValueError("price_per_minute must be >= 0")
        if not self.currency or not self.currency.strip():
            raise ValueError("currency cannot be empty")


@dataclass(frozen=True)
class LoggingConfig:
    """Log level and optional log file."""
    level: str = DEFAULT_LOG_LEVEL
    file: Optional[str] = None

    def __post_init__(self):
        """Validate log level is a known level name."""
        if self.level not in LOG_LEVELS:
            raise ValueError(f"logging level must be one of: {list(LOG_LEVELS)}")


@dataclass(frozen=True)
class CafeConfig:
    """Complete venue configuration."""
    pricing: PricingConfig = field(default_factory=PricingConfig)
    table_count: int = DEFAULT_TABLE_COUNT
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self):
        """Validate table count is positive."""
        if self.table_count < 1:
            raise ValueError("table count must be >= 1")


def load_cafe_config(path: str) -> CafeConfig:
    """Load and validate venue configuration from YAML file.

    Every section is optional; anything omitted takes its default.
    Unknown keys are rejected so typos never go unnoticed.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated CafeConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If configuration is invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    # Load YAML content
    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in config file {path}: {e}")

    if not raw_config:
        raise ValueError("Configuration file is empty")
    if not isinstance(raw_config, dict):
        raise ValueError("Configuration must be a dictionary")

    # Validate top-level structure
    allowed_top_keys = {'pricing', 'tables', 'logging'}
    unknown_keys = set(raw_config.keys()) - allowed_top_keys
    if unknown_keys:
        raise ValueError(f"Unknown configuration keys: {unknown_keys}")

    # Parse each section, falling back to defaults for omitted ones
    pricing = _parse_pricing(_section(raw_config, 'pricing'))
    table_count = _parse_table_count(_section(raw_config, 'tables'))
    logging_config = _parse_logging(_section(raw_config, 'logging'))

    return CafeConfig(
        pricing=pricing,
        table_count=table_count,
        logging=logging_config
    )


def _section(raw_config: Dict[str, Any], name: str) -> Dict[str, Any]:
    data = raw_config.get(name) or {}
    if not isinstance(data, dict):
        raise ValueError(f"'{name}' must be a dictionary")
    return data


def _check_keys(data: Dict[str, Any], allowed: set, path: str) -> None:
    unknown_keys = set(data.keys()) - allowed
    if unknown_keys:
        raise ValueError(f"Unknown keys in {path}: {unknown_keys}")


def _parse_pricing(data: Dict[str, Any]) -> PricingConfig:
    _check_keys(data, {'price_per_minute', 'currency'}, "pricing")

    # Validate price_per_minute (YAML .nan and .inf load as floats)
    price = data.get('price_per_minute', DEFAULT_PRICE_PER_MINUTE)
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        raise ValueError("'price_per_minute' in pricing must be a number >= 0")
    if not math.isfinite(price) or price < 0:
        raise ValueError("'price_per_minute' in pricing must be a finite number >= 0")

    # Validate currency
    currency = data.get('currency', DEFAULT_CURRENCY)
    if not isinstance(currency, str):
        raise ValueError("'currency' in pricing must be a string")

    return PricingConfig(price_per_minute=float(price), currency=currency)


def _parse_table_count(data: Dict[str, Any]) -> int:
    _check_keys(data, {'count'}, "tables")

    # Validate count
    count = data.get('count', DEFAULT_TABLE_COUNT)
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise ValueError("'count' in tables must be an integer >= 1")
    return count


def _parse_logging(data: Dict[str, Any]) -> LoggingConfig:
    _check_keys(data, {'level', 'file'}, "logging")

    # Validate level, accepting any case
    level = data.get('level', DEFAULT_LOG_LEVEL)
    if not isinstance(level, str):
        raise ValueError("'level' in logging must be a string")
    level = level.upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"'level' in logging must be one of: {list(LOG_LEVELS)}")

    # Validate optional log file path
    log_file = data.get('file')
    if log_file is not None and not isinstance(log_file, str):
        raise ValueError("'file' in logging must be a string")

    return LoggingConfig(level=level, file=log_file)
