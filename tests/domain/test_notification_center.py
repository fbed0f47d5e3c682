"""Tests for NotificationCenter."""

import pytest
from storefront.cart.store import CartStore
from storefront.notification.center import NotificationCenter
from storefront.notification.notification import NotificationType


@pytest.fixture()
def center(store):
    return NotificationCenter(store)


class TestNotify:
    def test_notification_starts_unread(self, center):
        notification = center.notify("user-001", "promotion", "Sale", "Everything 10% off")
        assert notification.read is False
        assert notification.notification_type == NotificationType.PROMOTION.value
        assert center.unread_count("user-001") == 1

    def test_ids_are_unique_and_creation_ordered(self, center):
        ids = [str(center.notify("user-001", "promotion", "t", f"m{n}").id) for n in range(5)]
        assert len(set(ids)) == 5
        assert ids == sorted(ids)

    def test_list_is_newest_first_and_per_user(self, center):
        first = center.notify("user-001", "promotion", "First", "1")
        second = center.notify("user-001", "order_update", "Second", "2")
        center.notify("user-002", "promotion", "Other", "3")

        listed = center.list_for_user("user-001")
        assert [n.id for n in listed] == [second.id, first.id]

    def test_unknown_type_is_rejected(self, center):
        with pytest.raises(ValueError):
            center.notify("user-001", "spam", "t", "m")


class TestMarkRead:
    def test_mark_read(self, center):
        notification = center.notify("user-001", "promotion", "t", "m")
        center.mark_read(notification.id)
        assert center.list_for_user("user-001")[0].read is True
        assert center.unread_count("user-001") == 0

    def test_mark_read_is_idempotent(self, center):
        notification = center.notify("user-001", "promotion", "t", "m")
        center.mark_read(notification.id)
        first = center.list_for_user("user-001")[0].to_record()
        center.mark_read(notification.id)
        assert center.list_for_user("user-001")[0].to_record() == first

    def test_unknown_id_is_ignored(self, center):
        center.notify("user-001", "promotion", "t", "m")
        center.mark_read("NTF-999999999999")
        assert center.unread_count("user-001") == 1


class TestClearAll:
    def test_clear_all(self, center):
        center.notify("user-001", "promotion", "t", "m")
        center.notify("user-001", "promotion", "t", "m")
        center.notify("user-002", "promotion", "t", "m")

        assert center.clear_all("user-001") == 2
        assert center.list_for_user("user-001") == []
        assert len(center.list_for_user("user-002")) == 1

    def test_cleared_ids_are_not_reused(self, center):
        old = center.notify("user-001", "promotion", "t", "m")
        center.clear_all("user-001")
        new = center.notify("user-001", "promotion", "t", "m")
        assert str(new.id) > str(old.id)


class TestKeyNamespaces:
    @pytest.mark.parametrize("user_id", ["sequence", "owner", "user"])
    def test_reserved_words_are_ordinary_user_ids(self, center, user_id):
        center.notify("user-001", "promotion", "t", "m")
        notification = center.notify(user_id, "promotion", "Sale", "Now on")

        assert [n.id for n in center.list_for_user(user_id)] == [notification.id]
        assert center.unread_count(user_id) == 1
        assert center.clear_all(user_id) == 1
        assert len(center.list_for_user("user-001")) == 1

    def test_sequence_survives_a_user_named_sequence(self, center):
        center.notify("sequence", "promotion", "t", "m")
        center.clear_all("sequence")
        later = center.notify("user-001", "promotion", "t", "m")
        assert str(later.id) == "NTF-000000000002"

    def test_owner_entries_are_not_user_lists(self, center):
        notification = center.notify("user-001", "promotion", "t", "m")
        owner_id = f"owner:{notification.id}"

        assert center.list_for_user(owner_id) == []
        assert center.unread_count(owner_id) == 0


class TestCartListener:
    def test_item_added_sends_cart_reminder(self, center, store, product_factory):
        cart = CartStore("user-001", store=store, listeners=[center.on_cart_event])
        cart.add_item(product_factory(name="Desk Lamp"))

        [notification] = center.list_for_user("user-001")
        assert notification.notification_type == "cart_reminder"
        assert "Desk Lamp" in notification.message

    def test_known_promotion_sends_promotion(self, center, store):
        cart = CartStore("user-001", store=store, listeners=[center.on_cart_event])
        cart.apply_promotion("freeship")

        [notification] = center.list_for_user("user-001")
        assert notification.notification_type == "promotion"
        assert "FREESHIP" in notification.message

    def test_unknown_promotion_is_silent(self, center, store):
        cart = CartStore("user-001", store=store, listeners=[center.on_cart_event])
        cart.apply_promotion("bogus")
        assert center.list_for_user("user-001") == []

    def test_other_cart_events_are_silent(self, center, store, product_factory):
        cart = CartStore("user-001", store=store)
        cart.add_item(product_factory())
        cart.subscribe(center.on_cart_event)
        cart.remove_item("prod-001")
        cart.clear()
        assert center.list_for_user("user-001") == []
