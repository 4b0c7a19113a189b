"""
In-Memory Order Store

Authoritative owner of every order. All mutation rules live here:
    - totals are maintained incrementally by the mutating operations
    - history is append-only and recorded in occurrence order
    - order identifiers never change once assigned

Access is serialized: a store-wide lock guards the mapping itself and a
per-order lock guards each read-modify-write on a single order, so the
store is safe behind a threaded server. Callers always receive deep
copies; nothing outside this module holds a live reference to store state.

Nothing is persisted. Restarting the process loses all orders.
"""

import copy
import logging
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Callable, Iterable, Iterator, Optional

from resto_orders.core.exceptions import (
    OrderNotFoundError,
    OrderStoreError,
    OrderValidationError,
)
from resto_orders.models import (
    HistoryEntry,
    ItemSpec,
    Order,
    OrderItem,
    OrderStatus,
    PaymentStatus,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

DAY_START = time(0, 0, 0, 0)
DAY_END = time(23, 59, 59, 999000)


def local_now() -> datetime:
    """Current local time, truncated to millisecond precision."""
    now = datetime.now().astimezone()
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _as_local_naive(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Inclusive local start and end of a calendar day."""
    return datetime.combine(day, DAY_START), datetime.combine(day, DAY_END)


def created_on(order: Order, day: date) -> bool:
    start, end = day_bounds(day)
    return start <= _as_local_naive(order.created_at) <= end


@dataclass(frozen=True)
class OrderFilter:
    """
    Query parameters for listing orders.

    Every field is optional; an empty filter matches all orders.
    """
    day: Optional[date] = None
    status: Optional[OrderStatus] = None
    room_no: Optional[str] = None

    def matches(self, order: Order) -> bool:
        if self.day is not None and not created_on(order, self.day):
            return False
        if self.status is not None and order.status != self.status:
            return False
        if self.room_no is not None and order.room_no != self.room_no:
            return False
        return True


class OrderNumberGenerator:
    """
    Issues ``ORD-YYMMDD-NNNNN`` order numbers.

    The suffix is the last five digits of the epoch-millisecond clock.
    When two orders land on the same suffix the later one is bumped to
    the next unused value, so numbers stay unique for the process.
    """

    SUFFIX_SPACE = 100_000

    def __init__(self):
        self._issued: set[str] = set()
        self._lock = threading.Lock()

    def next_number(self, now: datetime) -> str:
        prefix = now.strftime("ORD-%y%m%d-")
        suffix = int(now.timestamp() * 1000) % self.SUFFIX_SPACE

        with self._lock:
            for _ in range(self.SUFFIX_SPACE):
                order_no = f"{prefix}{suffix:05d}"
                if order_no not in self._issued:
                    self._issued.add(order_no)
                    return order_no
                suffix = (suffix + 1) % self.SUFFIX_SPACE

        raise OrderStoreError(f"No order numbers left for prefix {prefix}")


class OrderStore:
    """Thread-safe in-memory mapping from order id to order."""

    def __init__(
        self,
        clock: Clock = local_now,
        numbers: Optional[OrderNumberGenerator] = None,
        default_menu_version: str = "RestoVersion",
    ):
        self._clock = clock
        self._numbers = numbers or OrderNumberGenerator()
        self._default_menu_version = default_menu_version
        self._orders: dict[str, Order] = {}
        self._order_locks: dict[str, threading.Lock] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._orders)

    # =========================================================================
    # INTERNALS
    # =========================================================================

    @contextmanager
    def _locked(self, order_id: str) -> Iterator[Order]:
        """Yield the live order while holding its lock."""
        with self._lock:
            order = self._orders.get(order_id)
            order_lock = self._order_locks.get(order_id)
        if order is None or order_lock is None:
            raise OrderNotFoundError(order_id)
        with order_lock:
            yield order

    def _snapshot(self) -> list[tuple[Order, threading.Lock]]:
        with self._lock:
            return [(o, self._order_locks[o.id]) for o in self._orders.values()]

    def _make_items(self, order_id: str, specs: Iterable[ItemSpec]) -> list[OrderItem]:
        items = []
        for spec in specs:
            if spec.qty < 1:
                raise OrderValidationError(
                    f"Quantity for {spec.item_key!r} must be a positive integer"
                )
            if spec.price < 0:
                raise OrderValidationError(
                    f"Price for {spec.item_key!r} must not be negative"
                )
            items.append(OrderItem(
                id=uuid.uuid4().hex,
                order_id=order_id,
                item_key=spec.item_key,
                name=spec.name,
                price=spec.price,
                qty=spec.qty,
            ))
        return items

    # =========================================================================
    # COMMANDS
    # =========================================================================

    def create(
        self,
        guest_name: Optional[str] = None,
        room_no: Optional[str] = None,
        notes: Optional[str] = None,
        menu_version: Optional[str] = None,
        items: Iterable[ItemSpec] = (),
    ) -> Order:
        """
        Place a new order.

        An empty item list is accepted and produces an order with a zero
        total.
        """
        order_id = uuid.uuid4().hex
        lines = self._make_items(order_id, items)
        now = self._clock()

        order = Order(
            id=order_id,
            order_no=self._numbers.next_number(now),
            created_at=now,
            updated_at=now,
            guest_name=guest_name or "",
            room_no=room_no or "",
            notes=notes or "",
            menu_version=menu_version or self._default_menu_version,
            status=OrderStatus.NEW,
            payment_status=PaymentStatus.NOT_PAID,
            total=sum(line.line_total for line in lines),
            history=[HistoryEntry(when=now, action="Created")],
            items=lines,
        )

        with self._lock:
            self._orders[order_id] = order
            self._order_locks[order_id] = threading.Lock()
            snapshot = copy.deepcopy(order)

        logger.info(
            f"Order {order.order_no} created for room {order.room_no or '-'} "
            f"({len(lines)} items, total={order.total})"
        )
        return snapshot

    def add_items(self, order_id: str, items: Iterable[ItemSpec]) -> Order:
        """
        Append new lines to an order.

        Every requested item becomes a fresh line, even when the same menu
        item is already on the order. The status is forced to ``Updated``.
        """
        with self._locked(order_id) as order:
            lines = self._make_items(order_id, items)
            now = self._clock()

            order.items.extend(lines)
            order.total += sum(line.line_total for line in lines)
            order.updated_at = now
            order.history.append(HistoryEntry(when=now, action=f"Added {len(lines)} items"))
            order.status = OrderStatus.UPDATED

            logger.info(
                f"Order {order.order_no}: added {len(lines)} items (total={order.total})"
            )
            return copy.deepcopy(order)

    def update_fields(
        self,
        order_id: str,
        status: Optional[OrderStatus] = None,
        payment_status: Optional[PaymentStatus] = None,
        notes: Optional[str] = None,
    ) -> Order:
        """
        Apply whichever of status, payment status and notes are given.

        History only records status and payment changes that actually
        change the value. ``updated_at`` moves whenever a field is supplied.
        """
        with self._locked(order_id) as order:
            now = self._clock()
            touched = False

            if status is not None:
                touched = True
                if status != order.status:
                    order.history.append(HistoryEntry(when=now, action=f"Status -> {status.value}"))
                    order.status = status

            if payment_status is not None:
                touched = True
                if payment_status != order.payment_status:
                    order.history.append(
                        HistoryEntry(when=now, action=f"Payment -> {payment_status.value}")
                    )
                    order.payment_status = payment_status

            if notes is not None:
                touched = True
                order.notes = notes

            if touched:
                order.updated_at = now
                logger.info(
                    f"Order {order.order_no} updated "
                    f"(status={order.status.value}, payment={order.payment_status.value})"
                )

            return copy.deepcopy(order)

    def record_whatsapp_sent(self, order_id: str) -> Order:
        """Note in the history that the kitchen was messaged."""
        with self._locked(order_id) as order:
            order.history.append(
                HistoryEntry(when=self._clock(), action="WhatsApp sent to kitchen")
            )
            logger.info(f"Order {order.order_no}: kitchen notification recorded")
            return copy.deepcopy(order)

    # =========================================================================
    # QUERIES
    # =========================================================================

    def get(self, order_id: str) -> Order:
        with self._locked(order_id) as order:
            return copy.deepcopy(order)

    def _matching(self, order_filter: OrderFilter) -> list[Order]:
        """Copies of matching orders in insertion order."""
        matched = []
        for order, order_lock in self._snapshot():
            with order_lock:
                if order_filter.matches(order):
                    matched.append(copy.deepcopy(order))
        return matched

    def list_orders(self, order_filter: Optional[OrderFilter] = None) -> list[Order]:
        """Matching orders, newest first. No pagination."""
        order_filter = order_filter or OrderFilter()
        matched = self._matching(order_filter)
        matched.sort(key=lambda o: _as_local_naive(o.created_at), reverse=True)
        logger.debug(f"Listed {len(matched)} orders for {order_filter}")
        return matched

    def orders_for_day(self, day: date) -> list[Order]:
        """Orders created on a local calendar day, in creation order."""
        return self._matching(OrderFilter(day=day))
