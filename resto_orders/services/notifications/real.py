"""
Twilio Kitchen Notifier

Production implementation that delivers kitchen tickets as WhatsApp
messages through Twilio.
"""

import asyncio
import logging
from typing import Optional

from twilio.rest import Client as TwilioClient
from twilio.base.exceptions import TwilioException

from resto_orders.core.config import Settings
from resto_orders.models import Order
from resto_orders.services.notifications.base import (
    BaseKitchenNotifier,
    NotificationResult,
    build_kitchen_message,
)

logger = logging.getLogger(__name__)


def _whatsapp_address(number: str) -> str:
    return number if number.startswith("whatsapp:") else f"whatsapp:{number}"


class TwilioKitchenNotifier(BaseKitchenNotifier):
    """Production kitchen notifier using Twilio WhatsApp."""

    def __init__(self, settings: Settings, client: Optional[TwilioClient] = None):
        self.restaurant_name = settings.restaurant_name
        self.from_number = settings.twilio_whatsapp_from
        self.kitchen_number = settings.kitchen_whatsapp_number

        if client is not None:
            self.twilio_client = client
        elif settings.twilio_account_sid and settings.twilio_auth_token:
            self.twilio_client = TwilioClient(
                settings.twilio_account_sid,
                settings.twilio_auth_token,
            )
        else:
            self.twilio_client = None
            logger.warning("Twilio credentials not configured")

        logger.info("TwilioKitchenNotifier initialized")

    @property
    def provider_name(self) -> str:
        return "twilio"

    async def send_order_to_kitchen(self, order: Order) -> NotificationResult:
        """Send the kitchen ticket via Twilio WhatsApp."""
        if not self.twilio_client or not self.from_number or not self.kitchen_number:
            return NotificationResult(
                success=False,
                error_message="Twilio WhatsApp not configured",
                provider="twilio",
            )

        body = build_kitchen_message(order, self.restaurant_name)

        try:
            # The Twilio client is blocking; keep it off the event loop.
            result = await asyncio.to_thread(
                self.twilio_client.messages.create,
                body=body,
                from_=_whatsapp_address(self.from_number),
                to=_whatsapp_address(self.kitchen_number),
            )
        except TwilioException as e:
            logger.error(f"Twilio error for {order.order_no}: {e}")
            return NotificationResult(
                success=False,
                error_message=str(e),
                provider="twilio",
            )
        except Exception as e:
            # Transport failures surface as requests errors, not TwilioException.
            logger.exception(f"WhatsApp delivery failed for {order.order_no}: {e}")
            return NotificationResult(
                success=False,
                error_message=str(e),
                provider="twilio",
            )

        logger.info(f"WhatsApp sent to kitchen for {order.order_no}: {result.sid}")

        return NotificationResult(
            success=True,
            message_id=result.sid,
            provider="twilio",
        )

    async def health_check(self) -> bool:
        return self.twilio_client is not None
