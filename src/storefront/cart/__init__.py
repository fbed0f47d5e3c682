"""Cart registry — one CartStore per user for the running process.

Carts are wired to the configured store and to the notification center so
cart events produce notifications.
"""

_cart_stores: dict[str, object] = {}


def cart_for(user_id: str):
    """Return the cart store of ``user_id`` (created on first use)."""
    user_id = str(user_id)
    if user_id not in _cart_stores:
        from storefront.cart.store import CartStore
        from storefront.notification import get_notification_center
        from storefront.persistence import get_store

        _cart_stores[user_id] = CartStore(
            user_id,
            store=get_store(),
            listeners=[get_notification_center().on_cart_event],
        )
    return _cart_stores[user_id]


def reset_carts():
    """Forget all cart stores (useful for testing)."""
    _cart_stores.clear()
