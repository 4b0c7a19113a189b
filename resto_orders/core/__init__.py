"""
Core module initialization.
Exports configuration, logging utilities and domain errors.
"""

from resto_orders.core.config import get_settings, setup_logging, Settings, EnvironmentMode
from resto_orders.core.exceptions import (
    OrderStoreError,
    OrderNotFoundError,
    OrderValidationError,
)

__all__ = [
    "get_settings",
    "setup_logging",
    "Settings",
    "EnvironmentMode",
    "OrderStoreError",
    "OrderNotFoundError",
    "OrderValidationError",
]
