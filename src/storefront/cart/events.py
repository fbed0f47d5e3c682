"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="ShoppingCart")
class CartItemAdded:
    """A product was added to the cart (or its quantity increased)."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    product_id = String(required=True)
    product_name = String(required=True)
    quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="ShoppingCart")
class CartQuantityUpdated:
    __version__ = "v1"

    user_id = Identifier(required=True)
    product_id = String(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="ShoppingCart")
class CartItemRemoved:
    __version__ = "v1"

    user_id = Identifier(required=True)
    product_id = String(required=True)


@storefront.event(part_of="ShoppingCart")
class CartCleared:
    """All items were removed, at checkout or on request."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    items_removed = Integer(required=True)


@storefront.event(part_of="ShoppingCart")
class PromotionApplied:
    __version__ = "v1"

    user_id = Identifier(required=True)
    promotion_code = String(required=True)


@storefront.event(part_of="ShoppingCart")
class PromotionRemoved:
    __version__ = "v1"

    user_id = Identifier(required=True)
    promotion_code = String(required=True)
