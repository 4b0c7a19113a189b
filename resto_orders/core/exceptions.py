"""
Domain errors raised by the order store.

The API layer maps these onto HTTP responses; the store itself knows
nothing about HTTP.
"""


class OrderStoreError(Exception):
    """Base class for order store failures."""


class OrderNotFoundError(OrderStoreError):
    def __init__(self, order_id: str):
        super().__init__(f"Order {order_id} not found")
        self.order_id = order_id


class OrderValidationError(OrderStoreError):
    """Raised when an order or line item violates a data-model rule."""
