"""Notification management — commands and handler."""

from protean import handle
from protean.fields import Identifier, String

from storefront.domain import storefront
from storefront.notification import get_notification_center
from storefront.notification.notification import Notification


@storefront.command(part_of="Notification")
class MarkNotificationRead:
    notification_id = String(required=True, max_length=50)


@storefront.command(part_of="Notification")
class ClearNotifications:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=Notification)
class ManageNotificationsHandler:
    @handle(MarkNotificationRead)
    def mark_notification_read(self, command):
        get_notification_center().mark_read(command.notification_id)

    @handle(ClearNotifications)
    def clear_notifications(self, command):
        return get_notification_center().clear_all(command.user_id)
