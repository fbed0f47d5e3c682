"""Shopping Cart aggregate — the line items selected during the active session.

One cart per user. A product appears at most once: adding it again raises
the quantity instead of adding a second line. The cart lives for the
session; it is cleared on checkout or on request.
"""

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
    PromotionApplied,
    PromotionRemoved,
)
from storefront.domain import storefront
from storefront.errors import InvalidQuantityError
from storefront.pricing.promotions import normalize_code
from storefront.shared.timestamps import from_iso, to_iso, utc_now


@storefront.entity(part_of="ShoppingCart")
class CartItem:
    product_id = String(required=True, max_length=100)
    name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    category = String(max_length=100)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@storefront.aggregate
class ShoppingCart:
    user_id = Identifier(required=True)
    items = HasMany(CartItem)
    promotion_code = String(max_length=50)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = utc_now()
        return cls(user_id=user_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def find_item(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def add_item(self, product, quantity=1):
        """Add a product (or increase its quantity if already in the cart)."""
        if quantity < 1:
            raise InvalidQuantityError(quantity)

        now = utc_now()
        existing = self.find_item(product.product_id)
        if existing:
            existing.quantity += quantity
            new_quantity = existing.quantity
        else:
            self.add_items(
                CartItem(
                    product_id=product.product_id,
                    name=product.name,
                    unit_price=product.price,
                    category=product.category,
                    quantity=quantity,
                    added_at=now,
                )
            )
            new_quantity = quantity

        self.updated_at = now
        self.raise_(
            CartItemAdded(
                user_id=str(self.user_id),
                product_id=str(product.product_id),
                product_name=product.name,
                quantity=quantity,
                new_quantity=new_quantity,
            )
        )

    def update_quantity(self, product_id, quantity):
        """Set an item's quantity; anything below 1 removes the item."""
        if quantity < 1:
            self.remove_item(product_id)
            return

        item = self.find_item(product_id)
        if item is None or item.quantity == quantity:
            return

        previous_quantity = item.quantity
        item.quantity = quantity
        self.updated_at = utc_now()

        self.raise_(
            CartQuantityUpdated(
                user_id=str(self.user_id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, product_id):
        """Remove an item; removing a product that is not in the cart does nothing."""
        item = self.find_item(product_id)
        if item is None:
            return

        self.remove_items(item)
        self.updated_at = utc_now()

        self.raise_(
            CartItemRemoved(
                user_id=str(self.user_id),
                product_id=str(product_id),
            )
        )

    def clear(self):
        """Empty the cart and drop any applied promotion."""
        removed = len(self.items)
        for item in list(self.items):
            self.remove_items(item)
        self.promotion_code = None
        self.updated_at = utc_now()

        self.raise_(
            CartCleared(
                user_id=str(self.user_id),
                items_removed=removed,
            )
        )

    # -------------------------------------------------------------------
    # Promotions
    # -------------------------------------------------------------------
    def apply_promotion(self, code):
        """Record the promotion code the cart is priced with.

        Unknown codes are kept as entered; pricing grants them no discount.
        """
        normalized = normalize_code(code)
        if not normalized:
            self.remove_promotion()
            return

        self.promotion_code = normalized
        self.updated_at = utc_now()
        self.raise_(
            PromotionApplied(
                user_id=str(self.user_id),
                promotion_code=normalized,
            )
        )

    def remove_promotion(self):
        if not self.promotion_code:
            return

        code = self.promotion_code
        self.promotion_code = None
        self.updated_at = utc_now()
        self.raise_(
            PromotionRemoved(
                user_id=str(self.user_id),
                promotion_code=code,
            )
        )

    # -------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------
    def to_record(self) -> dict:
        return {
            "user_id": str(self.user_id),
            "promotion_code": self.promotion_code,
            "items": [
                {
                    "id": str(item.id),
                    "product_id": str(item.product_id),
                    "name": item.name,
                    "unit_price": str(item.unit_price),
                    "category": item.category,
                    "quantity": item.quantity,
                    "added_at": to_iso(item.added_at),
                }
                for item in self.items
            ],
            "created_at": to_iso(self.created_at),
            "updated_at": to_iso(self.updated_at),
        }

    @classmethod
    def from_record(cls, record: dict):
        return cls(
            user_id=record["user_id"],
            promotion_code=record.get("promotion_code"),
            items=[
                CartItem(
                    id=item["id"],
                    product_id=item["product_id"],
                    name=item["name"],
                    unit_price=float(item["unit_price"]),
                    category=item.get("category"),
                    quantity=item["quantity"],
                    added_at=from_iso(item.get("added_at")),
                )
                for item in record.get("items", [])
            ],
            created_at=from_iso(record.get("created_at")),
            updated_at=from_iso(record.get("updated_at")),
        )
