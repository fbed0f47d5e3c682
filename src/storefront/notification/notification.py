"""Notification aggregate — a message shown to a user in the storefront.

Notifications are created unread. Marking one read is the only mutation;
clearing a user's notifications deletes them.
"""

from enum import Enum

from protean.fields import Boolean, DateTime, Identifier, String, Text

from storefront.domain import storefront
from storefront.notification.events import NotificationCreated, NotificationRead
from storefront.shared.timestamps import from_iso, to_iso, utc_now


class NotificationType(Enum):
    CART_REMINDER = "cart_reminder"
    ORDER_UPDATE = "order_update"
    PROMOTION = "promotion"


@storefront.aggregate
class Notification:
    user_id: Identifier(required=True)
    notification_type: String(choices=NotificationType, required=True)

    # Content
    title: String(required=True, max_length=255)
    message: Text(required=True)

    created_at: DateTime(required=True)
    read: Boolean(default=False)
    read_at: DateTime()

    @classmethod
    def create(cls, notification_id, user_id, notification_type, title, message, created_at=None):
        """Create a new unread notification."""
        now = created_at or utc_now()
        notification = cls(
            id=notification_id,
            user_id=user_id,
            notification_type=NotificationType(notification_type).value,
            title=title,
            message=message,
            created_at=now,
            read=False,
        )
        notification.raise_(
            NotificationCreated(
                notification_id=str(notification.id),
                user_id=str(user_id),
                notification_type=notification.notification_type,
                title=title,
                created_at=now,
            )
        )
        return notification

    def mark_read(self, read_at=None) -> bool:
        """Mark as read. Returns False (and changes nothing) if already read."""
        if self.read:
            return False

        now = read_at or utc_now()
        self.read = True
        self.read_at = now
        self.raise_(
            NotificationRead(
                notification_id=str(self.id),
                user_id=str(self.user_id),
                read_at=now,
            )
        )
        return True

    def to_record(self) -> dict:
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "notification_type": self.notification_type,
            "title": self.title,
            "message": self.message,
            "created_at": to_iso(self.created_at),
            "read": self.read,
            "read_at": to_iso(self.read_at),
        }

    @classmethod
    def from_record(cls, record: dict):
        return cls(
            id=record["id"],
            user_id=record["user_id"],
            notification_type=record["notification_type"],
            title=record["title"],
            message=record["message"],
            created_at=from_iso(record["created_at"]),
            read=record.get("read", False),
            read_at=from_iso(record.get("read_at")),
        )
