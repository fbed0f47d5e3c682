"""Order aggregate — an immutable record of a checkout and its status lifecycle.

Items and pricing are snapshots taken at checkout: later cart or catalogue
changes never reach a placed order, and nothing mutates the pricing once
the order exists. Only the status moves, and only forward.

State Machine:
    PENDING → PROCESSING → SHIPPED → DELIVERED
    PENDING → CANCELLED
    PROCESSING → CANCELLED
"""

from decimal import Decimal
from enum import Enum

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.errors import InvalidStatusError, InvalidTransitionError
from storefront.order.events import OrderPlaced, OrderStatusChanged
from storefront.pricing.engine import PriceBreakdown, to_currency, to_decimal
from storefront.shared.payment import PaymentMethod
from storefront.shared.timestamps import from_iso, to_iso, utc_now


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value) -> "OrderStatus":
        """Coerce a stored or submitted value; raises InvalidStatusError."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidStatusError(value) from None


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

# Attribute recording when each status was reached
_STATUS_TIMESTAMPS = {
    OrderStatus.PROCESSING: "processing_at",
    OrderStatus.SHIPPED: "shipped_at",
    OrderStatus.DELIVERED: "delivered_at",
    OrderStatus.CANCELLED: "cancelled_at",
}

ADDRESS_FIELDS = ("name", "street", "city", "state", "zip_code", "country", "phone")


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships, captured at checkout and never updated."""

    name = String(required=True, max_length=255)
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)
    phone = String(required=True, max_length=50)

    def to_dict(self) -> dict:
        return {field: getattr(self, field) for field in ADDRESS_FIELDS}


@storefront.value_object(part_of="Order")
class OrderPricing:
    """Full price breakdown frozen at checkout, at currency precision.

    Keeping every component (not just the grand total) lets confirmation,
    invoice and history pages show the breakdown the customer actually paid,
    including any promotion.
    """

    subtotal = Float(default=0.0)
    shipping_fee = Float(default=0.0)
    tax = Float(default=0.0)
    discount = Float(default=0.0)
    payment_fee = Float(default=0.0)
    grand_total = Float(default=0.0)
    currency = String(max_length=3, default="USD")

    @classmethod
    def from_breakdown(cls, breakdown: PriceBreakdown, currency="USD"):
        rounded = breakdown.rounded()
        return cls(
            subtotal=float(rounded.subtotal),
            shipping_fee=float(rounded.shipping_fee),
            tax=float(rounded.tax),
            discount=float(rounded.discount),
            payment_fee=float(rounded.payment_fee),
            grand_total=float(rounded.total),
            currency=currency,
        )

    def amount(self, name) -> Decimal:
        return to_currency(to_decimal(getattr(self, name)))

    def to_dict(self) -> dict:
        record = {
            name: str(self.amount(name))
            for name in ("subtotal", "shipping_fee", "tax", "discount", "payment_fee", "grand_total")
        }
        record["currency"] = self.currency
        return record


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    product_id = String(required=True, max_length=100)
    name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    category = String(max_length=100)
    quantity = Integer(required=True, min_value=1)

    @property
    def line_total(self) -> Decimal:
        return to_decimal(self.unit_price) * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    pricing = ValueObject(OrderPricing)
    shipping_address = ValueObject(ShippingAddress)
    payment_method = String(choices=PaymentMethod, required=True)
    promotion_code = String(max_length=50)
    tracking_number = String(required=True, max_length=50)
    created_at = DateTime(required=True)
    estimated_delivery = DateTime()
    processing_at = DateTime()
    shipped_at = DateTime()
    delivered_at = DateTime()
    cancelled_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        order_id,
        user_id,
        items_data,
        shipping_address,
        payment_method,
        pricing,
        tracking_number,
        created_at,
        estimated_delivery,
        promotion_code=None,
    ):
        """Create a new pending order from checkout data.

        Args:
            items_data: List of dicts with product_id, name, unit_price,
                        category, quantity.
            shipping_address: ShippingAddress value object.
            pricing: OrderPricing value object.
        """
        order = cls(
            id=order_id,
            user_id=user_id,
            status=OrderStatus.PENDING.value,
            items=[OrderItem(**item) for item in items_data],
            pricing=pricing,
            shipping_address=shipping_address,
            payment_method=PaymentMethod.parse(payment_method).value,
            promotion_code=promotion_code,
            tracking_number=tracking_number,
            created_at=created_at,
            estimated_delivery=estimated_delivery,
            updated_at=created_at,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                tracking_number=tracking_number,
                payment_method=order.payment_method,
                grand_total=pricing.grand_total,
                created_at=created_at,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------
    def can_transition_to(self, target) -> bool:
        target = OrderStatus.parse(target)
        return target in _VALID_TRANSITIONS.get(OrderStatus(self.status), set())

    def allowed_transitions(self) -> list[OrderStatus]:
        return sorted(_VALID_TRANSITIONS[OrderStatus(self.status)], key=lambda s: list(OrderStatus).index(s))

    def transition_to(self, target, at=None):
        """Move the order to ``target``; raises InvalidTransitionError otherwise.

        A rejected transition leaves the order untouched.
        """
        target = OrderStatus.parse(target)
        current = OrderStatus(self.status)
        if not self.can_transition_to(target):
            raise InvalidTransitionError(current.value, target.value)

        now = at or utc_now()
        self.status = target.value
        setattr(self, _STATUS_TIMESTAMPS[target], now)
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                user_id=str(self.user_id),
                tracking_number=self.tracking_number,
                previous_status=current.value,
                new_status=target.value,
                changed_at=now,
            )
        )

    @property
    def is_terminal(self) -> bool:
        return not _VALID_TRANSITIONS[OrderStatus(self.status)]

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    # -------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------
    def to_record(self) -> dict:
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "status": self.status,
            "items": [
                {
                    "id": str(item.id),
                    "product_id": item.product_id,
                    "name": item.name,
                    "unit_price": str(to_currency(item.unit_price)),
                    "category": item.category,
                    "quantity": item.quantity,
                }
                for item in self.items
            ],
            "pricing": self.pricing.to_dict(),
            "shipping_address": self.shipping_address.to_dict(),
            "payment_method": self.payment_method,
            "promotion_code": self.promotion_code,
            "tracking_number": self.tracking_number,
            "created_at": to_iso(self.created_at),
            "estimated_delivery": to_iso(self.estimated_delivery),
            "processing_at": to_iso(self.processing_at),
            "shipped_at": to_iso(self.shipped_at),
            "delivered_at": to_iso(self.delivered_at),
            "cancelled_at": to_iso(self.cancelled_at),
            "updated_at": to_iso(self.updated_at),
        }

    @classmethod
    def from_record(cls, record: dict):
        pricing = record["pricing"]
        return cls(
            id=record["id"],
            user_id=record["user_id"],
            status=record["status"],
            items=[
                OrderItem(
                    id=item["id"],
                    product_id=item["product_id"],
                    name=item["name"],
                    unit_price=float(item["unit_price"]),
                    category=item.get("category"),
                    quantity=item["quantity"],
                )
                for item in record["items"]
            ],
            pricing=OrderPricing(
                subtotal=float(pricing["subtotal"]),
                shipping_fee=float(pricing["shipping_fee"]),
                tax=float(pricing["tax"]),
                discount=float(pricing["discount"]),
                payment_fee=float(pricing["payment_fee"]),
                grand_total=float(pricing["grand_total"]),
                currency=pricing.get("currency", "USD"),
            ),
            shipping_address=ShippingAddress(**record["shipping_address"]),
            payment_method=record["payment_method"],
            promotion_code=record.get("promotion_code"),
            tracking_number=record["tracking_number"],
            created_at=from_iso(record["created_at"]),
            estimated_delivery=from_iso(record.get("estimated_delivery")),
            processing_at=from_iso(record.get("processing_at")),
            shipped_at=from_iso(record.get("shipped_at")),
            delivered_at=from_iso(record.get("delivered_at")),
            cancelled_at=from_iso(record.get("cancelled_at")),
            updated_at=from_iso(record.get("updated_at")),
        )
