"""
Mock Kitchen Notifier

Simulates WhatsApp delivery for development.
No actual messages are sent - just logged.
"""

import asyncio
import random
import uuid
import logging

from resto_orders.models import Order
from resto_orders.services.notifications.base import (
    BaseKitchenNotifier,
    NotificationResult,
    build_kitchen_message,
)

logger = logging.getLogger(__name__)


class MockKitchenNotifier(BaseKitchenNotifier):
    """Mock kitchen notifier for development."""

    def __init__(
        self,
        restaurant_name: str,
        failure_rate: float = 0.0,
        max_latency: float = 0.0,
    ):
        self.restaurant_name = restaurant_name
        self.failure_rate = failure_rate
        self.max_latency = max_latency
        self.sent: list[str] = []
        logger.info(f"MockKitchenNotifier initialized (failure_rate={failure_rate:.0%})")

    @property
    def provider_name(self) -> str:
        return "mock"

    async def _simulate_latency(self) -> None:
        if self.max_latency > 0:
            await asyncio.sleep(random.uniform(0, self.max_latency))

    def _should_fail(self) -> bool:
        return random.random() < self.failure_rate

    async def send_order_to_kitchen(self, order: Order) -> NotificationResult:
        """Simulate sending the kitchen ticket."""
        await self._simulate_latency()

        if self._should_fail():
            logger.warning(f"Mock WhatsApp failed (simulated) for {order.order_no}")
            return NotificationResult(
                success=False,
                error_message="Simulated WhatsApp failure",
                provider="mock",
            )

        message = build_kitchen_message(order, self.restaurant_name)
        self.sent.append(message)

        message_id = f"wa_mock_{uuid.uuid4().hex[:12]}"
        logger.info(f"Mock WhatsApp to kitchen for {order.order_no} (ID: {message_id})")
        logger.debug(message)

        return NotificationResult(
            success=True,
            message_id=message_id,
            provider="mock",
        )

    async def health_check(self) -> bool:
        """Mock always returns healthy."""
        return True
