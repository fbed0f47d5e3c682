"""Order ledger — durable home of placed orders and their status changes.

Keys in the store:

    orders:id:<order_id>           the order record
    orders:index                   every order id, in save order
    orders:tracking:<tracking>     tracking number -> order id
    orders:user:<user_id>          the user's order ids, in save order

Each kind of key has its own prefix, so no order id or user id can name
another kind of record. ``save`` writes the tracking entry and indices
before the record itself: an order is visible only once its record
exists, and a save interrupted by a store failure can be retried.

The ledger is shared across sessions. ``update_status`` serializes its
read-check-write per order id over a fixed set of striped locks; ``save``
serializes on the indices.
"""

import threading

import structlog

from storefront.errors import DuplicateOrderError, InvalidTransitionError, OrderNotFoundError
from storefront.order.order import Order, OrderStatus
from storefront.persistence.port import KeyValueStore, key

logger = structlog.get_logger(__name__)

ORDERS_NAMESPACE = "orders"
LOCK_STRIPES = 64


def record_key(order_id) -> str:
    return key(ORDERS_NAMESPACE, "id", str(order_id))


def tracking_key(tracking_number) -> str:
    return key(ORDERS_NAMESPACE, "tracking", str(tracking_number))


class OrderLedger:
    def __init__(self, store: KeyValueStore, notification_center=None, stripes: int = LOCK_STRIPES):
        self._store = store
        self._notification_center = notification_center
        self._index_lock = threading.RLock()
        self._stripes = [threading.RLock() for _ in range(stripes)]

    @property
    def notification_center(self):
        return self._notification_center

    # -------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------
    def save(self, order: Order) -> Order:
        """Persist a newly placed order.

        Raises DuplicateOrderError if the id or the tracking number is
        already recorded for another order.
        """
        order_id = str(order.id)
        with self._index_lock:
            if self._store.get(record_key(order_id)) is not None:
                logger.warning("Duplicate order id", order_id=order_id)
                raise DuplicateOrderError(order_id)
            owner = self._store.get(tracking_key(order.tracking_number))
            if owner is not None and owner != order_id:
                logger.warning("Duplicate tracking number", tracking_number=order.tracking_number)
                raise DuplicateOrderError(order.tracking_number, field="tracking_number")

            self._store.set(tracking_key(order.tracking_number), order_id)
            self._append(key(ORDERS_NAMESPACE, "index"), order_id)
            self._append(key(ORDERS_NAMESPACE, "user", str(order.user_id)), order_id)
            self._store.set(record_key(order_id), order.to_record())

        order._events.clear()
        logger.info(
            "Order saved",
            order_id=order_id,
            user_id=str(order.user_id),
            tracking_number=order.tracking_number,
        )
        return order

    def update_status(self, order_id: str, new_status) -> Order:
        """Move an order along its status graph and notify its owner.

        An invalid transition leaves the stored order untouched and sends
        no notification.
        """
        order_id = str(order_id)
        target = OrderStatus.parse(new_status)
        with self._lock_for(order_id):
            order = self.get(order_id)
            try:
                order.transition_to(target)
            except InvalidTransitionError:
                logger.warning(
                    "Rejected order status change",
                    order_id=order_id,
                    current_status=order.status,
                    requested_status=target.value,
                )
                raise
            self._store.set(record_key(order_id), order.to_record())

        order._events.clear()
        logger.info("Order status changed", order_id=order_id, status=order.status)

        if self._notification_center is not None:
            self._notification_center.notify_order_status(order)
        return order

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def find_by_id(self, order_id: str) -> Order | None:
        record = self._store.get(record_key(order_id))
        return Order.from_record(record) if record else None

    def find_by_tracking(self, tracking_number: str) -> Order | None:
        order_id = self._store.get(tracking_key(str(tracking_number).strip()))
        return self.find_by_id(order_id) if order_id else None

    def get(self, order_id: str) -> Order:
        order = self.find_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(str(order_id))
        return order

    def get_by_tracking(self, tracking_number: str) -> Order:
        order = self.find_by_tracking(tracking_number)
        if order is None:
            raise OrderNotFoundError(str(tracking_number), field="tracking_number")
        return order

    def find_by_user(self, user_id: str) -> list[Order]:
        """The user's orders, most recent first."""
        return self._load_many(self._store.get(key(ORDERS_NAMESPACE, "user", str(user_id))) or [])

    def all_orders(self) -> list[Order]:
        """Every order, most recent first."""
        return self._load_many(self._store.get(key(ORDERS_NAMESPACE, "index")) or [])

    def search(self, term: str | None = None, status=None) -> list[Order]:
        """Admin search: term against order id or shipping name, optional status filter."""
        status = OrderStatus.parse(status).value if status else None
        needle = (term or "").strip().lower()

        results = []
        for order in self.all_orders():
            if status and order.status != status:
                continue
            if needle and needle not in str(order.id).lower() and needle not in order.shipping_address.name.lower():
                continue
            results.append(order)
        return results

    def search_user_orders(self, user_id: str, term: str | None = None) -> list[Order]:
        """Customer search: term against order id or any product name."""
        needle = (term or "").strip().lower()
        orders = self.find_by_user(user_id)
        if not needle:
            return orders
        return [
            order
            for order in orders
            if needle in str(order.id).lower() or any(needle in item.name.lower() for item in order.items)
        ]

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    def _lock_for(self, order_id: str) -> threading.RLock:
        return self._stripes[hash(order_id) % len(self._stripes)]

    def _append(self, index_key: str, order_id: str):
        ids = self._store.get(index_key) or []
        if order_id in ids:
            return
        ids.append(order_id)
        self._store.set(index_key, ids)

    def _load_many(self, order_ids: list[str]) -> list[Order]:
        orders = [order for order in (self.find_by_id(order_id) for order_id in order_ids) if order]
        # Stable sort keeps save order among equal timestamps, newest saved first
        orders.reverse()
        orders.sort(key=lambda order: order.created_at, reverse=True)
        return orders
