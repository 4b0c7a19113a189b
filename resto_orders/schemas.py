"""
Pydantic Schemas for Request/Response Validation

Request bodies mirror what the staff client posts; responses expose the
full order with its lines and structured history.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from resto_orders.models import ItemSpec, OrderStatus, PaymentStatus


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class OrderItemIn(BaseModel):
    """Single requested line, captured from the menu at add time."""
    item_key: str = Field(..., min_length=1, examples=["soup_03"])
    name: str = Field(..., min_length=1, examples=["Tomato Soup"])
    price: int = Field(..., ge=0, examples=[100])
    qty: int = Field(default=1, ge=1, examples=[2])

    def to_spec(self) -> ItemSpec:
        return ItemSpec(
            item_key=self.item_key,
            name=self.name,
            price=self.price,
            qty=self.qty,
        )


class OrderCreate(BaseModel):
    """Request schema for placing a new order."""
    guest_name: str = Field(default="", max_length=100, examples=["A. Rao"])
    room_no: str = Field(default="", max_length=20, examples=["204"])
    notes: str = Field(default="", max_length=500)
    menu_version: Optional[str] = Field(default=None, examples=["RestoVersion"])
    items: List[OrderItemIn] = Field(default_factory=list)


class AddItemsRequest(BaseModel):
    items: List[OrderItemIn] = Field(default_factory=list)


class OrderUpdate(BaseModel):
    """
    Partial update. Omitted fields are left alone.

    ``requested_time`` is accepted for older clients and is stored in the
    notes; an explicit ``notes`` value takes precedence.
    """
    status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None
    notes: Optional[str] = Field(default=None, max_length=500)
    requested_time: Optional[str] = None

    def resolved_notes(self) -> Optional[str]:
        if self.notes is not None:
            return self.notes
        return self.requested_time or None


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class OrderItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_id: str
    item_key: str
    name: str
    qty: int
    price: int


class HistoryEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    when: datetime
    action: str


class OrderResponse(BaseModel):
    """Response schema for a single order."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_no: str
    created_at: datetime
    updated_at: datetime
    guest_name: str
    room_no: str
    notes: str
    menu_version: str
    status: OrderStatus
    payment_status: PaymentStatus
    total: int
    history: List[HistoryEntryResponse]
    items: List[OrderItemResponse]


class OkResponse(BaseModel):
    ok: bool = True


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str


class MenuItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    price: int
    category: str
    description: Optional[str] = None


class MenuCategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    items: List[MenuItemResponse]


class MenuResponse(BaseModel):
    version: str
    categories: List[MenuCategoryResponse]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    orders_in_memory: int
    notification_service: str
    timestamp: datetime
