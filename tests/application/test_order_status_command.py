"""Application tests for order status updates."""

import pytest
from protean import current_domain
from storefront.cart.items import AddToCart
from storefront.errors import InvalidTransitionError, OrderNotFoundError
from storefront.notification import get_notification_center
from storefront.order import get_ledger
from storefront.order.checkout import PlaceOrder
from storefront.order.status import UpdateOrderStatus


@pytest.fixture()
def order_id(address):
    current_domain.process(
        AddToCart(user_id="user-001", product_id="prod-001", name="Widget", price=60.0),
        asynchronous=False,
    )
    return current_domain.process(
        PlaceOrder(user_id="user-001", payment_method="googlepay", **address),
        asynchronous=False,
    )


def _update(order_id, status):
    return current_domain.process(UpdateOrderStatus(order_id=order_id, status=status), asynchronous=False)


class TestUpdateOrderStatus:
    def test_advances_order(self, order_id):
        _update(order_id, "processing")
        assert get_ledger().get(order_id).status == "processing"

    def test_notifies_each_change(self, order_id):
        for status in ("processing", "shipped", "delivered"):
            _update(order_id, status)
        titles = [n.title for n in get_notification_center().list_for_user("user-001")]
        assert titles[:3] == ["Order Delivered", "Order Shipped", "Order Processing"]

    def test_invalid_transition(self, order_id):
        with pytest.raises(InvalidTransitionError):
            _update(order_id, "delivered")
        assert get_ledger().get(order_id).status == "pending"

    def test_unknown_order(self):
        with pytest.raises(OrderNotFoundError):
            _update("ORD-UNKNOWN", "processing")
