"""Cart store — the active session's cart, its persistence and its listeners.

A single actor (the session) drives a cart, so mutations are not locked.
After every mutation the cart is written back to the key-value store under
``cart:<user_id>`` and the domain events it raised are handed to the
registered listeners, in order.
"""

from collections.abc import Callable

import structlog

from storefront.cart.cart import ShoppingCart
from storefront.errors import PersistenceError
from storefront.pricing import engine
from storefront.pricing.engine import PriceBreakdown
from storefront.persistence.port import KeyValueStore, key

logger = structlog.get_logger(__name__)

CART_NAMESPACE = "cart"


class CartStore:
    def __init__(
        self,
        user_id: str,
        store: KeyValueStore | None = None,
        listeners: list[Callable] | None = None,
        settings=None,
    ):
        self.user_id = str(user_id)
        self._store = store
        self._listeners: list[Callable] = list(listeners or [])
        self._settings = settings
        self._cart = self._load()

    # -------------------------------------------------------------------
    # Readers
    # -------------------------------------------------------------------
    @property
    def items(self) -> list:
        return list(self._cart.items)

    @property
    def promotion_code(self) -> str | None:
        return self._cart.promotion_code

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self._cart.items)

    @property
    def is_empty(self) -> bool:
        return not self._cart.items

    def totals(self, payment_method=None) -> PriceBreakdown:
        """Price the cart as it stands now; never cached."""
        return engine.price(
            self._cart.items,
            promotion_code=self._cart.promotion_code,
            payment_method=payment_method,
            settings=self._settings,
        )

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_item(self, product, quantity=1):
        self._apply(lambda cart: cart.add_item(product, quantity))

    def update_quantity(self, product_id, quantity):
        self._apply(lambda cart: cart.update_quantity(product_id, quantity))

    def remove_item(self, product_id):
        self._apply(lambda cart: cart.remove_item(product_id))

    def clear(self):
        self._apply(lambda cart: cart.clear())

    def apply_promotion(self, code):
        self._apply(lambda cart: cart.apply_promotion(code))

    def remove_promotion(self):
        self._apply(lambda cart: cart.remove_promotion())

    def subscribe(self, listener: Callable):
        """Register a callable invoked with every event the cart raises."""
        self._listeners.append(listener)

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    def _load(self) -> ShoppingCart:
        if self._store is not None:
            record = self._store.get(key(CART_NAMESPACE, self.user_id))
            if record:
                return ShoppingCart.from_record(record)
        return ShoppingCart.create(user_id=self.user_id)

    def _apply(self, mutation: Callable):
        """Run ``mutation`` on the cart, then persist it and publish its events.

        When the store rejects the write, the cart is restored to its last
        committed state and its pending events are dropped, so the caller can
        retry the same call.
        """
        committed = self._cart.to_record()
        mutation(self._cart)
        try:
            self._commit()
        except PersistenceError:
            self._cart = ShoppingCart.from_record(committed)
            raise
        self._publish()

    def _commit(self):
        if self._store is not None:
            self._store.set(key(CART_NAMESPACE, self.user_id), self._cart.to_record())

    def _publish(self):
        events = list(self._cart._events)
        self._cart._events.clear()
        for event in events:
            logger.debug("Cart event", user_id=self.user_id, event_type=type(event).__name__)
            for listener in self._listeners:
                listener(event)
