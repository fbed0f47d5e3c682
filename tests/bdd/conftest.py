"""Shared BDD fixtures and step definitions for the Storefront."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then
from storefront.cart import cart_for
from storefront.cart.items import AddToCart
from storefront.order import get_ledger
from storefront.order.checkout import PlaceOrder

USER_ID = "shopper-001"


@pytest.fixture()
def shopper_id():
    return USER_ID


@pytest.fixture()
def outcome():
    """Holds the error raised by the last When step, if any."""
    return {}


def add_to_cart(product_id, price, quantity, user_id=USER_ID):
    current_domain.process(
        AddToCart(user_id=user_id, product_id=product_id, name=product_id, price=price, quantity=quantity),
        asynchronous=False,
    )


@pytest.fixture()
def checkout(address):
    """Place an order for the shopper's cart and return it."""

    def _checkout(payment_method="card", user_id=USER_ID):
        order_id = current_domain.process(
            PlaceOrder(user_id=user_id, payment_method=payment_method, **address),
            asynchronous=False,
        )
        return get_ledger().get(order_id)

    return _checkout


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.parse(
        'a cart containing {qty_a:d} of "{product_a}" at {price_a:g} '
        'and {qty_b:d} of "{product_b}" at {price_b:g}'
    ),
    target_fixture="cart",
)
def _(qty_a, product_a, price_a, qty_b, product_b, price_b):
    add_to_cart(product_a, price_a, qty_a)
    add_to_cart(product_b, price_b, qty_b)
    return cart_for(USER_ID)


@given("a placed order", target_fixture="order")
def _(checkout):
    add_to_cart("prod-001", 25.0, 1)
    return checkout()


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.parse('the order status is "{status}"'))
def _(order, status):
    assert get_ledger().get(order.id).status == status


@then("the change is rejected as a conflict")
def _(outcome):
    assert outcome["error"].kind.value == "conflict"
