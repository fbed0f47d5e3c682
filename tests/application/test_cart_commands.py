"""Application tests for cart commands."""

from decimal import Decimal

import pytest
from protean import current_domain
from protean.exceptions import ValidationError as ProteanValidationError
from storefront.cart import cart_for
from storefront.cart.items import AddToCart, ApplyPromotion, ClearCart, RemoveFromCart, UpdateCartQuantity
from storefront.notification import get_notification_center
from storefront.persistence import get_store


def _add(user_id="user-001", product_id="prod-001", price=20.0, quantity=1, name="Widget"):
    current_domain.process(
        AddToCart(user_id=user_id, product_id=product_id, name=name, price=price, quantity=quantity),
        asynchronous=False,
    )


class TestAddToCartCommand:
    def test_add_item_persists(self):
        _add(quantity=2)
        assert cart_for("user-001").item_count == 2
        assert get_store().get("cart:user-001")["items"][0]["quantity"] == 2

    def test_add_same_product_twice(self):
        _add()
        _add(quantity=2)
        cart = cart_for("user-001")
        assert len(cart.items) == 1
        assert cart.item_count == 3

    def test_zero_quantity_is_rejected_by_command(self):
        with pytest.raises(ProteanValidationError):
            AddToCart(user_id="user-001", product_id="p", name="n", price=1.0, quantity=0)

    def test_negative_price_is_rejected_by_command(self):
        with pytest.raises(ProteanValidationError):
            AddToCart(user_id="user-001", product_id="p", name="n", price=-1.0)

    def test_add_sends_cart_reminder(self):
        _add(name="Desk Lamp")
        [notification] = get_notification_center().list_for_user("user-001")
        assert notification.notification_type == "cart_reminder"


class TestOtherCartCommands:
    def test_update_quantity(self):
        _add()
        current_domain.process(
            UpdateCartQuantity(user_id="user-001", product_id="prod-001", quantity=4),
            asynchronous=False,
        )
        assert cart_for("user-001").item_count == 4

    def test_update_to_zero_removes(self):
        _add()
        current_domain.process(
            UpdateCartQuantity(user_id="user-001", product_id="prod-001", quantity=0),
            asynchronous=False,
        )
        assert cart_for("user-001").is_empty

    def test_remove(self):
        _add()
        _add(product_id="prod-002")
        current_domain.process(RemoveFromCart(user_id="user-001", product_id="prod-001"), asynchronous=False)
        assert [item.product_id for item in cart_for("user-001").items] == ["prod-002"]

    def test_clear(self):
        _add()
        current_domain.process(ClearCart(user_id="user-001"), asynchronous=False)
        assert cart_for("user-001").is_empty

    def test_apply_promotion_changes_totals(self):
        _add(price=20.0, quantity=2)
        _add(product_id="prod-002", price=15.0)
        current_domain.process(ApplyPromotion(user_id="user-001", promotion_code="save10"), asynchronous=False)
        assert cart_for("user-001").totals().rounded().total == Decimal("53.90")
