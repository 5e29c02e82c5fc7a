"""
Core Utilities Package

Shared primitives used across the scraper.

This package provides:
- Amount handling with integer arithmetic for precision
- Calendar date wrapper with ISO and day-first formatting
- Configuration management for environment-specific settings
- JSON helpers with consistent formatting
"""

from .config import (
    Config,
    Environment,
    MediapartConfig,
    get_bills_dir,
    get_config,
    get_data_dir,
    is_development,
    is_production,
    is_test,
    reload_config,
)
from .currency import (
    amount_to_cents,
    cents_to_amount,
    cents_to_decimal_str,
    parse_decimal_to_cents,
)
from .dates import FinancialDate
from .money import Money

__all__ = [
    # Configuration
    "Config",
    "Environment",
    "FinancialDate",
    "MediapartConfig",
    "Money",
    # Currency utilities
    "amount_to_cents",
    "cents_to_amount",
    "cents_to_decimal_str",
    "get_bills_dir",
    "get_config",
    "get_data_dir",
    "is_development",
    "is_production",
    "is_test",
    "parse_decimal_to_cents",
    "reload_config",
]
