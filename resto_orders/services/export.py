"""
Daily CSV Export

Builds the end-of-day order sheet: one row per order created on the
requested local calendar day, in creation order. Text fields are
double-quoted, the total is left as a bare number.
"""

import csv
import logging
from datetime import date
from typing import Any, Iterable

import pandas as pd

from resto_orders.models import Order

logger = logging.getLogger(__name__)


EXPORT_COLUMNS = [
    "order_no",
    "created_at",
    "guest_name",
    "room_no",
    "total",
    "status",
    "payment_status",
    "items",
]


def export_filename(day: date) -> str:
    return f"orders-{day.isoformat()}.csv"


def _order_row(order: Order) -> dict[str, Any]:
    return {
        "order_no": order.order_no,
        "created_at": order.created_at.isoformat(timespec="milliseconds"),
        "guest_name": order.guest_name,
        "room_no": order.room_no,
        "total": order.total,
        "status": order.status.value,
        "payment_status": order.payment_status.value,
        "items": order.item_summary(),
    }


def orders_to_csv(orders: Iterable[Order]) -> str:
    """
    Render orders as CSV text.

    The header is written unquoted; a day without orders yields the header
    line alone.
    """
    header = ",".join(EXPORT_COLUMNS)
    rows = [_order_row(order) for order in orders]
    if not rows:
        return header

    df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
    body = df.to_csv(
        index=False,
        header=False,
        quoting=csv.QUOTE_NONNUMERIC,
        lineterminator="\n",
    )

    logger.info(f"Exported {len(df)} orders to CSV")
    return header + "\n" + body.rstrip("\n")
