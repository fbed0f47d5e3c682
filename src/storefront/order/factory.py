"""Order factory — turns a cart and checkout details into a pending order.

The factory only constructs: it neither clears the cart nor saves the
order. Checkout (``storefront.order.checkout``) composes it with the ledger.
"""

import secrets
import string
import uuid
from collections.abc import Callable, Mapping
from datetime import datetime, timedelta

import structlog

from storefront.config import StorefrontSettings, get_settings
from storefront.errors import EmptyCartError, InvalidAddressError
from storefront.order.order import ADDRESS_FIELDS, Order, OrderPricing, ShippingAddress
from storefront.pricing import engine
from storefront.shared.payment import PaymentMethod
from storefront.shared.timestamps import utc_now

logger = structlog.get_logger(__name__)

_TRACKING_ALPHABET = string.ascii_uppercase + string.digits


def generate_order_id() -> str:
    return f"ORD-{uuid.uuid4().hex[:12].upper()}"


def generate_tracking_number() -> str:
    return "TRK" + "".join(secrets.choice(_TRACKING_ALPHABET) for _ in range(9))


def validate_address(address) -> ShippingAddress:
    """Build a ShippingAddress, failing on the first missing or blank field."""
    if isinstance(address, ShippingAddress):
        address = address.to_dict()
    if not isinstance(address, Mapping):
        address = {field: getattr(address, field, None) for field in ADDRESS_FIELDS}

    cleaned = {}
    for field in ADDRESS_FIELDS:
        value = address.get(field)
        value = value.strip() if isinstance(value, str) else value
        if not value:
            raise InvalidAddressError(field)
        cleaned[field] = str(value)
    return ShippingAddress(**cleaned)


class OrderFactory:
    def __init__(
        self,
        settings: StorefrontSettings | None = None,
        clock: Callable[[], datetime] = utc_now,
        id_generator: Callable[[], str] = generate_order_id,
        tracking_generator: Callable[[], str] = generate_tracking_number,
    ):
        self._settings = settings
        self._clock = clock
        self._id_generator = id_generator
        self._tracking_generator = tracking_generator

    @property
    def settings(self) -> StorefrontSettings:
        return self._settings or get_settings()

    def create_order(self, cart, shipping_address, payment_method, user_id) -> Order:
        """Snapshot ``cart`` into a new pending order.

        ``cart`` is anything exposing ``items`` and ``promotion_code``
        (a CartStore or a ShoppingCart).
        """
        items = list(cart.items)
        if not items:
            raise EmptyCartError()

        address = validate_address(shipping_address)
        method = PaymentMethod.parse(payment_method)
        settings = self.settings

        breakdown = engine.price(
            items,
            promotion_code=cart.promotion_code,
            payment_method=method,
            settings=settings,
        )

        # Copy by value so later cart edits never reach the order
        items_data = [
            {
                "product_id": str(item.product_id),
                "name": item.name,
                "unit_price": float(engine.to_currency(item.unit_price)),
                "category": item.category,
                "quantity": item.quantity,
            }
            for item in items
        ]

        created_at = self._clock()
        order = Order.place(
            order_id=self._id_generator(),
            user_id=str(user_id),
            items_data=items_data,
            shipping_address=address,
            payment_method=method.value,
            pricing=OrderPricing.from_breakdown(breakdown, currency=settings.currency),
            tracking_number=self._tracking_generator(),
            created_at=created_at,
            estimated_delivery=created_at + timedelta(days=settings.delivery_lead_days),
            promotion_code=breakdown.promotion_code,
        )

        logger.info(
            "Order created",
            order_id=str(order.id),
            user_id=str(user_id),
            items=len(items_data),
            grand_total=str(order.pricing.amount("grand_total")),
        )
        return order
