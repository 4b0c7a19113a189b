"""
Printable Bill Rendering

Renders an order as a narrow (thermal-printer width) HTML bill that
prints itself when opened. Tax is not charged, so subtotal and total
are always equal.
"""

from pathlib import Path

from fastapi.templating import Jinja2Templates

from resto_orders.core.config import Settings
from resto_orders.models import Order

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATE_DIR))

BILL_TAX = 0


def render_bill(order: Order, settings: Settings) -> str:
    template = templates.get_template("bill.html")
    return template.render(
        restaurant_name=settings.restaurant_name,
        currency=settings.currency_symbol,
        order=order,
        printed_date=order.created_at.strftime("%d/%m/%Y, %I:%M:%S %p"),
        subtotal=order.total,
        tax=BILL_TAX,
        grand_total=order.total + BILL_TAX,
    )
