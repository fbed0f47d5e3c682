"""Notification center — creates, lists and clears user notifications.

Keys in the store:

    notifications:user:<user_id>     the user's notification records, oldest first
    notifications:owner:<id>         notification id -> user id
    notifications:sequence           last issued sequence number

Each kind of key has its own prefix, so a user id can never name the
sequence counter or an owner entry.

Ids are ``NTF-`` followed by a zero-padded sequence number, so they sort in
creation order. The center is shared by the cart and the order ledger;
every read-modify-write of its keys is serialized.
"""

import threading

import structlog

from storefront.cart.events import CartItemAdded, PromotionApplied
from storefront.config import get_settings
from storefront.notification.notification import Notification, NotificationType
from storefront.notification.templates import CartReminderTemplate, PromotionTemplate, template_for_status
from storefront.persistence.port import KeyValueStore, key
from storefront.pricing.promotions import lookup

logger = structlog.get_logger(__name__)

NOTIFICATIONS_NAMESPACE = "notifications"


def user_key(user_id) -> str:
    return key(NOTIFICATIONS_NAMESPACE, "user", str(user_id))


class NotificationCenter:
    def __init__(self, store: KeyValueStore):
        self._store = store
        self._lock = threading.RLock()

    # -------------------------------------------------------------------
    # Core operations
    # -------------------------------------------------------------------
    def notify(self, user_id, notification_type, title, message) -> Notification:
        """Create an unread notification for ``user_id``."""
        user_id = str(user_id)
        with self._lock:
            notification = Notification.create(
                notification_id=self._next_id(),
                user_id=user_id,
                notification_type=notification_type,
                title=title,
                message=message,
            )
            records = self._records(user_id)
            records.append(notification.to_record())
            self._store.set(user_key(user_id), records)
            self._store.set(key(NOTIFICATIONS_NAMESPACE, "owner", str(notification.id)), user_id)

        notification._events.clear()
        logger.info(
            "Notification created",
            notification_id=str(notification.id),
            user_id=user_id,
            notification_type=notification.notification_type,
        )
        return notification

    def mark_read(self, notification_id) -> None:
        """Mark a notification read; unknown or already-read ids are ignored."""
        notification_id = str(notification_id)
        with self._lock:
            user_id = self._store.get(key(NOTIFICATIONS_NAMESPACE, "owner", notification_id))
            if user_id is None:
                logger.debug("Notification not found", notification_id=notification_id)
                return

            records = self._records(user_id)
            for index, record in enumerate(records):
                if record["id"] != notification_id:
                    continue
                notification = Notification.from_record(record)
                if notification.mark_read():
                    records[index] = notification.to_record()
                    self._store.set(user_key(user_id), records)
                return

    def list_for_user(self, user_id) -> list[Notification]:
        """The user's notifications, newest first."""
        notifications = [Notification.from_record(record) for record in self._records(str(user_id))]
        notifications.sort(key=lambda n: (n.created_at, str(n.id)), reverse=True)
        return notifications

    def clear_all(self, user_id) -> int:
        """Delete every notification of ``user_id``; returns how many were removed."""
        user_id = str(user_id)
        with self._lock:
            records = self._records(user_id)
            for record in records:
                self._store.delete(key(NOTIFICATIONS_NAMESPACE, "owner", record["id"]))
            self._store.delete(user_key(user_id))

        logger.info("Notifications cleared", user_id=user_id, count=len(records))
        return len(records)

    def unread_count(self, user_id) -> int:
        return sum(1 for record in self._records(str(user_id)) if not record.get("read"))

    # -------------------------------------------------------------------
    # Producers
    # -------------------------------------------------------------------
    def notify_order_status(self, order) -> Notification:
        """Send the order update matching the order's current status."""
        content = template_for_status(order.status).render(
            {
                "order_id": str(order.id),
                "tracking_number": order.tracking_number,
                "status": order.status,
            }
        )
        return self.notify(
            order.user_id,
            NotificationType.ORDER_UPDATE.value,
            content["title"],
            content["message"],
        )

    def on_cart_event(self, event) -> Notification | None:
        """Cart listener: item additions remind, recognized promotions confirm."""
        if isinstance(event, CartItemAdded):
            template = CartReminderTemplate
            context = {"product_name": event.product_name}
        elif isinstance(event, PromotionApplied):
            if lookup(event.promotion_code, get_settings().promotions) is None:
                return None
            template = PromotionTemplate
            context = {"promotion_code": event.promotion_code}
        else:
            return None

        content = template.render(context)
        return self.notify(event.user_id, template.notification_type, content["title"], content["message"])

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    def _records(self, user_id: str) -> list[dict]:
        return self._store.get(user_key(user_id)) or []

    def _next_id(self) -> str:
        sequence_key = key(NOTIFICATIONS_NAMESPACE, "sequence")
        sequence = (self._store.get(sequence_key) or 0) + 1
        self._store.set(sequence_key, sequence)
        return f"NTF-{sequence:012d}"
