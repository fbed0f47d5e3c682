"""Tests for the Order aggregate state machine and records."""

from datetime import UTC, datetime

import pytest
from storefront.errors import ConflictError, InvalidStatusError, InvalidTransitionError, ValidationError
from storefront.order.events import OrderStatusChanged
from storefront.order.factory import OrderFactory
from storefront.order.order import Order, OrderStatus


@pytest.fixture()
def order(product_factory, address):
    from storefront.cart.store import CartStore

    cart = CartStore("user-001")
    cart.add_item(product_factory(price=12.50), 2)
    order = OrderFactory().create_order(cart, address, "card", "user-001")
    order._events.clear()
    return order


class TestTransitions:
    def test_full_happy_path(self, order):
        for status in ("processing", "shipped", "delivered"):
            order.transition_to(status)
            assert order.status == status
        assert order.is_terminal

    def test_records_transition_timestamps(self, order):
        at = datetime(2024, 5, 1, tzinfo=UTC)
        order.transition_to(OrderStatus.PROCESSING, at=at)
        assert order.processing_at == at
        assert order.updated_at == at

    def test_raises_status_changed(self, order):
        order.transition_to("processing")
        event = order._events[-1]
        assert isinstance(event, OrderStatusChanged)
        assert event.previous_status == "pending"
        assert event.new_status == "processing"

    @pytest.mark.parametrize("status", ["pending", "processing"])
    def test_cancel_from_open_states(self, order, status):
        if status == "processing":
            order.transition_to("processing")
        order.transition_to("cancelled")
        assert order.status == "cancelled"
        assert order.cancelled_at is not None

    def test_pending_cannot_skip_to_shipped(self, order):
        with pytest.raises(InvalidTransitionError) as exc:
            order.transition_to("shipped")
        assert isinstance(exc.value, ConflictError)
        assert order.status == "pending"
        assert order.shipped_at is None
        assert order._events == []

    def test_shipped_cannot_be_cancelled(self, order):
        order.transition_to("processing")
        order.transition_to("shipped")
        with pytest.raises(InvalidTransitionError):
            order.transition_to("cancelled")

    @pytest.mark.parametrize("target", list(OrderStatus))
    def test_delivered_is_terminal(self, order, target):
        order.transition_to("processing")
        order.transition_to("shipped")
        order.transition_to("delivered")
        with pytest.raises(InvalidTransitionError):
            order.transition_to(target)
        assert order.status == "delivered"

    def test_allowed_transitions(self, order):
        assert order.allowed_transitions() == [OrderStatus.PROCESSING, OrderStatus.CANCELLED]

    def test_unknown_status_is_a_validation_error(self, order):
        with pytest.raises(InvalidStatusError) as exc:
            order.transition_to("lost")
        assert isinstance(exc.value, ValidationError)
        assert exc.value.status == "lost"
        assert order.status == "pending"


class TestRecord:
    def test_record_uses_strings(self, order):
        record = order.to_record()
        assert record["pricing"]["grand_total"] == "36.99"  # 25 + 9.99 + 2.00
        assert record["items"][0]["unit_price"] == "12.50"
        assert isinstance(record["created_at"], str)

    def test_record_round_trip(self, order):
        order.transition_to("processing")
        restored = Order.from_record(order.to_record())

        assert restored.to_record() == order.to_record()
        assert restored.status == "processing"
        assert restored.processing_at == order.processing_at
        assert restored.shipping_address.name == "Jane Doe"
