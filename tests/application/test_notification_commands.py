"""Application tests for notification commands."""

from protean import current_domain
from storefront.notification import get_notification_center
from storefront.notification.management import ClearNotifications, MarkNotificationRead


class TestNotificationCommands:
    def test_mark_read(self):
        center = get_notification_center()
        notification = center.notify("user-001", "promotion", "Sale", "Now on")
        current_domain.process(MarkNotificationRead(notification_id=str(notification.id)), asynchronous=False)
        assert center.unread_count("user-001") == 0

    def test_mark_read_twice(self):
        center = get_notification_center()
        notification = center.notify("user-001", "promotion", "Sale", "Now on")
        for _ in range(2):
            current_domain.process(MarkNotificationRead(notification_id=str(notification.id)), asynchronous=False)
        assert center.list_for_user("user-001")[0].read is True

    def test_clear(self):
        center = get_notification_center()
        center.notify("user-001", "promotion", "Sale", "Now on")
        current_domain.process(ClearNotifications(user_id="user-001"), asynchronous=False)
        assert center.list_for_user("user-001") == []
