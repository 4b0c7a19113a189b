"""
Kitchen Notifier Factory

``build_kitchen_notifier(settings)`` picks the delivery channel for kitchen
tickets: development logs them, staging and production send WhatsApp
messages through Twilio. ``get_kitchen_notifier()`` is the process-wide
instance used as a FastAPI dependency.
"""

import logging
from functools import lru_cache

from resto_orders.core.config import Settings, get_settings
from resto_orders.services.notifications.base import (
    BaseKitchenNotifier,
    NotificationResult,
    build_kitchen_message,
)
from resto_orders.services.notifications.mock import MockKitchenNotifier
from resto_orders.services.notifications.real import TwilioKitchenNotifier

logger = logging.getLogger(__name__)


def build_kitchen_notifier(settings: Settings) -> BaseKitchenNotifier:
    """
    Notifier for the given settings.

    A Twilio notifier is still returned when WhatsApp keys are missing; it
    reports every send as failed so the order flow keeps working.
    """
    if settings.is_development:
        return MockKitchenNotifier(restaurant_name=settings.restaurant_name)

    missing = settings.validate_production_config()
    if missing:
        logger.warning(f"Kitchen WhatsApp disabled, missing: {', '.join(missing)}")
    return TwilioKitchenNotifier(settings)


@lru_cache()
def get_kitchen_notifier() -> BaseKitchenNotifier:
    notifier = build_kitchen_notifier(get_settings())
    logger.info(f"Kitchen Notifier: {type(notifier).__name__}")
    return notifier


def reset_kitchen_notifier() -> None:
    get_kitchen_notifier.cache_clear()


__all__ = [
    "build_kitchen_notifier",
    "get_kitchen_notifier",
    "reset_kitchen_notifier",
    "BaseKitchenNotifier",
    "NotificationResult",
    "MockKitchenNotifier",
    "TwilioKitchenNotifier",
    "build_kitchen_message",
]
