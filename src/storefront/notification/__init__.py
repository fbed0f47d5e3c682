"""Notification center registry — the process-wide center over the configured store."""

_center_instance = None


def get_notification_center():
    """Return the notification center (singleton)."""
    global _center_instance
    if _center_instance is None:
        from storefront.notification.center import NotificationCenter
        from storefront.persistence import get_store

        _center_instance = NotificationCenter(get_store())
    return _center_instance


def reset_notification_center():
    """Reset the notification center singleton (useful for testing)."""
    global _center_instance
    _center_instance = None
