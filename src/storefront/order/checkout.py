"""Checkout — convert the user's cart into a placed order."""

import structlog
from protean import handle
from protean.fields import Identifier, String

from storefront.cart import cart_for
from storefront.domain import storefront
from storefront.order import get_ledger
from storefront.order.factory import OrderFactory
from storefront.order.order import ADDRESS_FIELDS, Order
from storefront.shared.payment import PaymentMethod

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    """Check out the user's current cart.

    Address fields are optional here so a missing one is reported as an
    InvalidAddressError naming the field.
    """

    user_id = Identifier(required=True)
    payment_method = String(choices=PaymentMethod, required=True)
    name = String(max_length=255)
    street = String(max_length=255)
    city = String(max_length=100)
    state = String(max_length=100)
    zip_code = String(max_length=20)
    country = String(max_length=100)
    phone = String(max_length=50)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart = cart_for(command.user_id)
        address = {field: getattr(command, field) for field in ADDRESS_FIELDS}

        order = OrderFactory().create_order(
            cart,
            shipping_address=address,
            payment_method=command.payment_method,
            user_id=command.user_id,
        )

        ledger = get_ledger()
        ledger.save(order)
        cart.clear()

        if ledger.notification_center is not None:
            ledger.notification_center.notify_order_status(order)

        logger.info("Checkout complete", order_id=str(order.id), user_id=str(command.user_id))
        return str(order.id)
