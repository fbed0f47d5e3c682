"""Tests for the ShoppingCart aggregate."""

import pytest
from storefront.cart.cart import ShoppingCart
from storefront.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
    PromotionApplied,
    PromotionRemoved,
)
from storefront.errors import InvalidQuantityError, ValidationError


def _make_cart():
    return ShoppingCart.create(user_id="user-001")


class TestAddItem:
    def test_add_item(self, product_factory):
        cart = _make_cart()
        cart.add_item(product_factory(), 2)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2
        assert cart.items[0].unit_price == 25.0

    def test_add_same_product_increases_quantity(self, product_factory):
        cart = _make_cart()
        cart.add_item(product_factory(), 1)
        cart.add_item(product_factory(), 2)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3

    def test_add_different_products_creates_lines(self, product_factory):
        cart = _make_cart()
        cart.add_item(product_factory("prod-001"))
        cart.add_item(product_factory("prod-002", name="Gizmo"))
        assert [item.product_id for item in cart.items] == ["prod-001", "prod-002"]

    def test_add_item_raises_event(self, product_factory):
        cart = _make_cart()
        cart.add_item(product_factory(), 1)
        cart.add_item(product_factory(), 2)
        added = [e for e in cart._events if isinstance(e, CartItemAdded)]
        assert len(added) == 2
        assert added[1].quantity == 2
        assert added[1].new_quantity == 3

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_rejects_non_positive_quantity(self, product_factory, quantity):
        cart = _make_cart()
        with pytest.raises(InvalidQuantityError) as exc:
            cart.add_item(product_factory(), quantity)
        assert isinstance(exc.value, ValidationError)
        assert len(cart.items) == 0


class TestUpdateQuantity:
    def test_update_quantity(self, product_factory):
        cart = _make_cart()
        cart.add_item(product_factory())
        cart._events.clear()
        cart.update_quantity("prod-001", 5)
        assert cart.items[0].quantity == 5
        event = cart._events[0]
        assert isinstance(event, CartQuantityUpdated)
        assert event.previous_quantity == 1
        assert event.new_quantity == 5

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_quantity_below_one_removes_item(self, product_factory, quantity):
        cart = _make_cart()
        cart.add_item(product_factory())
        cart.update_quantity("prod-001", quantity)
        assert len(cart.items) == 0

    def test_unknown_product_is_ignored(self, product_factory):
        cart = _make_cart()
        cart.add_item(product_factory())
        cart._events.clear()
        cart.update_quantity("missing", 4)
        assert cart.items[0].quantity == 1
        assert cart._events == []


class TestRemoveAndClear:
    def test_remove_item(self, product_factory):
        cart = _make_cart()
        cart.add_item(product_factory())
        cart.remove_item("prod-001")
        assert len(cart.items) == 0
        assert isinstance(cart._events[-1], CartItemRemoved)

    def test_remove_absent_item_is_noop(self, product_factory):
        cart = _make_cart()
        cart.add_item(product_factory())
        cart._events.clear()
        cart.remove_item("missing")
        assert len(cart.items) == 1
        assert cart._events == []

    def test_clear_drops_items_and_promotion(self, product_factory):
        cart = _make_cart()
        cart.add_item(product_factory("prod-001"))
        cart.add_item(product_factory("prod-002"))
        cart.apply_promotion("SAVE10")
        cart.clear()
        assert len(cart.items) == 0
        assert cart.promotion_code is None
        cleared = cart._events[-1]
        assert isinstance(cleared, CartCleared)
        assert cleared.items_removed == 2


class TestPromotionCode:
    def test_apply_normalizes_code(self):
        cart = _make_cart()
        cart.apply_promotion(" save10 ")
        assert cart.promotion_code == "SAVE10"
        assert isinstance(cart._events[-1], PromotionApplied)

    def test_unknown_code_is_kept(self):
        cart = _make_cart()
        cart.apply_promotion("whatever")
        assert cart.promotion_code == "WHATEVER"

    def test_blank_code_removes_promotion(self):
        cart = _make_cart()
        cart.apply_promotion("FREESHIP")
        cart.apply_promotion("   ")
        assert cart.promotion_code is None
        assert isinstance(cart._events[-1], PromotionRemoved)


class TestRecord:
    def test_record_round_trip(self, product_factory):
        cart = _make_cart()
        cart.add_item(product_factory(price=19.99), 3)
        cart.apply_promotion("SAVE10")

        restored = ShoppingCart.from_record(cart.to_record())

        assert restored.promotion_code == "SAVE10"
        assert restored.items[0].product_id == "prod-001"
        assert restored.items[0].unit_price == 19.99
        assert restored.items[0].quantity == 3
        assert restored.to_record() == cart.to_record()
