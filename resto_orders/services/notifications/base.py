"""
Kitchen Notifier Abstract Base Class

Defines the interface for pushing an order ticket to the kitchen.
Supports both Mock (development) and Twilio WhatsApp (production)
implementations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from resto_orders.models import Order


@dataclass
class NotificationResult:
    """Result from sending a notification."""
    success: bool
    message_id: Optional[str] = None
    error_message: Optional[str] = None
    provider: str = "unknown"


def build_kitchen_message(order: Order, restaurant_name: str) -> str:
    """Plain-text kitchen ticket for an order."""
    lines = [
        f"*{restaurant_name}* - New ticket {order.order_no}",
        f"Room: {order.room_no or '-'} | Guest: {order.guest_name or '-'}",
        "",
    ]
    lines.extend(f"{item.qty} x {item.name}" for item in order.items)
    if order.notes:
        lines.extend(["", f"Notes: {order.notes}"])
    return "\n".join(lines)


class BaseKitchenNotifier(ABC):
    """Abstract base class for kitchen notifiers."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name."""
        pass

    @abstractmethod
    async def send_order_to_kitchen(self, order: Order) -> NotificationResult:
        """Deliver an order ticket to the kitchen."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check service connectivity."""
        pass
