"""Pydantic request/response models for the Storefront API.

API schemas are separate from Protean commands (anti-corruption pattern).
Amounts are rendered as decimal strings.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Models
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str = Field(..., max_length=100)
    name: str = Field(..., max_length=255)
    price: float = Field(..., ge=0)
    category: str | None = None
    quantity: int = Field(default=1, ge=1)


class UpdateQuantityRequest(BaseModel):
    quantity: int = Field(..., ge=0, description="Zero removes the line")


class ApplyPromotionRequest(BaseModel):
    promotion_code: str | None = Field(default=None, examples=["SAVE10"])


class ShippingAddressRequest(BaseModel):
    # Optional so a missing field surfaces as the domain's address error
    name: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    phone: str | None = None


class PlaceOrderRequest(BaseModel):
    user_id: str
    payment_method: str = Field(..., examples=["card", "googlepay", "cod"])
    shipping_address: ShippingAddressRequest


class UpdateOrderStatusRequest(BaseModel):
    status: str = Field(..., examples=["processing"])


# ---------------------------------------------------------------------------
# Response Models
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class PriceBreakdownResponse(BaseModel):
    subtotal: str
    shipping_fee: str
    tax: str
    discount: str
    payment_fee: str
    total: str
    promotion_code: str | None = None


class CartItemResponse(BaseModel):
    product_id: str
    name: str
    unit_price: str
    category: str | None = None
    quantity: int


class CartResponse(BaseModel):
    user_id: str
    items: list[CartItemResponse]
    promotion_code: str | None = None
    item_count: int
    totals: PriceBreakdownResponse


class OrderIdResponse(BaseModel):
    order_id: str
    tracking_number: str


class OrderItemResponse(BaseModel):
    product_id: str
    name: str
    unit_price: str
    category: str | None = None
    quantity: int


class OrderPricingResponse(BaseModel):
    subtotal: str
    shipping_fee: str
    tax: str
    discount: str
    payment_fee: str
    grand_total: str
    currency: str


class OrderResponse(BaseModel):
    id: str
    user_id: str
    status: str
    items: list[OrderItemResponse]
    pricing: OrderPricingResponse
    shipping_address: dict[str, str]
    payment_method: str
    promotion_code: str | None = None
    tracking_number: str
    created_at: str
    estimated_delivery: str | None = None
    updated_at: str | None = None


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]


class TrackingEventResponse(BaseModel):
    timestamp: str
    status: str
    location: str
    description: str


class TrackingResponse(BaseModel):
    order_id: str
    tracking_number: str
    status: str
    estimated_delivery: str | None = None
    events: list[TrackingEventResponse]


class NotificationResponse(BaseModel):
    id: str
    user_id: str
    notification_type: str
    title: str
    message: str
    created_at: str
    read: bool


class NotificationListResponse(BaseModel):
    notifications: list[NotificationResponse]
    unread_count: int


class ClearedResponse(BaseModel):
    status: str = "ok"
    cleared: int
