"""
Order Domain Models

In-memory representation of orders, their line items and audit history.
The order store owns every instance; callers only ever receive copies.
"""

import enum
from dataclasses import dataclass, field
from datetime import datetime


class OrderStatus(str, enum.Enum):
    """Order workflow states. Any state may follow any other."""
    NEW = "New"
    PREPARING = "Preparing"
    READY = "Ready"
    SERVED = "Served"
    COMPLETED = "Completed"
    UPDATED = "Updated"


class PaymentStatus(str, enum.Enum):
    NOT_PAID = "Not Paid"
    PAID = "Paid"
    PARTIAL = "Partial"


@dataclass(frozen=True)
class ItemSpec:
    """A requested line: what the caller wants added to an order."""
    item_key: str
    name: str
    price: int
    qty: int = 1

    @property
    def line_total(self) -> int:
        return self.price * self.qty


@dataclass(frozen=True)
class HistoryEntry:
    """Immutable audit record."""
    when: datetime
    action: str


@dataclass
class OrderItem:
    """
    A line on an order.

    ``name`` and ``price`` are snapshots taken when the line was added.
    """
    id: str
    order_id: str
    item_key: str
    name: str
    price: int
    qty: int = 1

    @property
    def line_total(self) -> int:
        return self.price * self.qty


@dataclass
class Order:
    """A guest's order with its lines and audit history."""
    id: str
    order_no: str
    created_at: datetime
    updated_at: datetime
    guest_name: str = ""
    room_no: str = ""
    notes: str = ""
    menu_version: str = "RestoVersion"
    status: OrderStatus = OrderStatus.NEW
    payment_status: PaymentStatus = PaymentStatus.NOT_PAID
    total: int = 0
    history: list[HistoryEntry] = field(default_factory=list)
    items: list[OrderItem] = field(default_factory=list)

    def item_summary(self) -> str:
        """Compact ``2x Tomato Soup|1x Roti`` summary used by exports."""
        return "|".join(f"{item.qty}x {item.name}" for item in self.items)
