"""Order ledger registry — the process-wide ledger wired to its collaborators."""

_ledger_instance = None


def get_ledger():
    """Return the order ledger (singleton), backed by the configured store."""
    global _ledger_instance
    if _ledger_instance is None:
        from storefront.notification import get_notification_center
        from storefront.order.ledger import OrderLedger
        from storefront.persistence import get_store

        _ledger_instance = OrderLedger(get_store(), notification_center=get_notification_center())
    return _ledger_instance


def reset_ledger():
    """Reset the ledger singleton (useful for testing)."""
    global _ledger_instance
    _ledger_instance = None
