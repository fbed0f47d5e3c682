"""FastAPI routes for the Storefront.

Thin adapters that translate HTTP requests into domain commands (writes)
or service reads. No business logic — just schema→command→response
translation.
"""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    AddToCartRequest,
    ApplyPromotionRequest,
    CartItemResponse,
    CartResponse,
    ClearedResponse,
    NotificationListResponse,
    NotificationResponse,
    OrderIdResponse,
    OrderListResponse,
    OrderResponse,
    PlaceOrderRequest,
    PriceBreakdownResponse,
    StatusResponse,
    TrackingEventResponse,
    TrackingResponse,
    UpdateOrderStatusRequest,
    UpdateQuantityRequest,
)
from storefront.cart import cart_for
from storefront.cart.items import AddToCart, ApplyPromotion, ClearCart, RemoveFromCart, UpdateCartQuantity
from storefront.notification import get_notification_center
from storefront.notification.management import ClearNotifications, MarkNotificationRead
from storefront.order import get_ledger
from storefront.order.checkout import PlaceOrder
from storefront.order.invoice import build_invoice
from storefront.order.status import UpdateOrderStatus
from storefront.pricing.engine import to_currency
from storefront.shared.timestamps import to_iso
from storefront.tracking.timeline import build_timeline

cart_router = APIRouter(prefix="/carts", tags=["carts"])
order_router = APIRouter(prefix="/orders", tags=["orders"])
tracking_router = APIRouter(prefix="/track", tags=["tracking"])
notification_router = APIRouter(prefix="/notifications", tags=["notifications"])


def _cart_response(user_id: str, payment_method: str | None = None) -> CartResponse:
    cart = cart_for(user_id)
    return CartResponse(
        user_id=str(user_id),
        items=[
            CartItemResponse(
                product_id=str(item.product_id),
                name=item.name,
                unit_price=str(to_currency(item.unit_price)),
                category=item.category,
                quantity=item.quantity,
            )
            for item in cart.items
        ],
        promotion_code=cart.promotion_code,
        item_count=cart.item_count,
        totals=PriceBreakdownResponse(**cart.totals(payment_method).to_dict()),
    )


def _order_response(order) -> OrderResponse:
    return OrderResponse(**order.to_record())


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@cart_router.get("/{user_id}", response_model=CartResponse)
async def get_cart(user_id: str, payment_method: str | None = None) -> CartResponse:
    """Current cart with freshly computed totals."""
    return _cart_response(user_id, payment_method)


@cart_router.post("/{user_id}/items", status_code=201, response_model=CartResponse)
async def add_to_cart(user_id: str, body: AddToCartRequest) -> CartResponse:
    command = AddToCart(
        user_id=user_id,
        product_id=body.product_id,
        name=body.name,
        price=body.price,
        category=body.category,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return _cart_response(user_id)


@cart_router.put("/{user_id}/items/{product_id}", response_model=CartResponse)
async def update_cart_quantity(user_id: str, product_id: str, body: UpdateQuantityRequest) -> CartResponse:
    command = UpdateCartQuantity(user_id=user_id, product_id=product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart_response(user_id)


@cart_router.delete("/{user_id}/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(user_id: str, product_id: str) -> CartResponse:
    command = RemoveFromCart(user_id=user_id, product_id=product_id)
    current_domain.process(command, asynchronous=False)
    return _cart_response(user_id)


@cart_router.put("/{user_id}/promotion", response_model=CartResponse)
async def apply_promotion(user_id: str, body: ApplyPromotionRequest) -> CartResponse:
    command = ApplyPromotion(user_id=user_id, promotion_code=body.promotion_code)
    current_domain.process(command, asynchronous=False)
    return _cart_response(user_id)


@cart_router.delete("/{user_id}", response_model=StatusResponse)
async def clear_cart(user_id: str) -> StatusResponse:
    current_domain.process(ClearCart(user_id=user_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def place_order(body: PlaceOrderRequest) -> OrderIdResponse:
    """Check out the user's cart."""
    command = PlaceOrder(
        user_id=body.user_id,
        payment_method=body.payment_method,
        **body.shipping_address.model_dump(),
    )
    order_id = current_domain.process(command, asynchronous=False)
    order = get_ledger().get(order_id)
    return OrderIdResponse(order_id=str(order.id), tracking_number=order.tracking_number)


@order_router.get("", response_model=OrderListResponse)
async def search_orders(q: str | None = None, status: str | None = None) -> OrderListResponse:
    """Admin listing: every order, optionally filtered."""
    orders = get_ledger().search(term=q, status=status)
    return OrderListResponse(orders=[_order_response(order) for order in orders])


@order_router.get("/user/{user_id}", response_model=OrderListResponse)
async def user_orders(user_id: str, q: str | None = None) -> OrderListResponse:
    orders = get_ledger().search_user_orders(user_id, q)
    return OrderListResponse(orders=[_order_response(order) for order in orders])


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    return _order_response(get_ledger().get(order_id))


@order_router.get("/{order_id}/invoice")
async def get_invoice(order_id: str) -> dict:
    return build_invoice(get_ledger().get(order_id))


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderResponse:
    command = UpdateOrderStatus(order_id=order_id, status=body.status)
    current_domain.process(command, asynchronous=False)
    return _order_response(get_ledger().get(order_id))


# ---------------------------------------------------------------------------
# Tracking
# ---------------------------------------------------------------------------
@tracking_router.get("/{tracking_number}", response_model=TrackingResponse)
async def track_order(tracking_number: str) -> TrackingResponse:
    order = get_ledger().get_by_tracking(tracking_number)
    return TrackingResponse(
        order_id=str(order.id),
        tracking_number=order.tracking_number,
        status=order.status,
        estimated_delivery=to_iso(order.estimated_delivery),
        events=[
            TrackingEventResponse(
                timestamp=to_iso(event.timestamp),
                status=event.status,
                location=event.location,
                description=event.description,
            )
            for event in build_timeline(order)
        ],
    )


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------
@notification_router.get("/{user_id}", response_model=NotificationListResponse)
async def list_notifications(user_id: str) -> NotificationListResponse:
    center = get_notification_center()
    return NotificationListResponse(
        notifications=[
            NotificationResponse(
                id=str(n.id),
                user_id=str(n.user_id),
                notification_type=n.notification_type,
                title=n.title,
                message=n.message,
                created_at=to_iso(n.created_at),
                read=n.read,
            )
            for n in center.list_for_user(user_id)
        ],
        unread_count=center.unread_count(user_id),
    )


@notification_router.put("/read/{notification_id}", response_model=StatusResponse)
async def mark_notification_read(notification_id: str) -> StatusResponse:
    current_domain.process(MarkNotificationRead(notification_id=notification_id), asynchronous=False)
    return StatusResponse()


@notification_router.delete("/{user_id}", response_model=ClearedResponse)
async def clear_notifications(user_id: str) -> ClearedResponse:
    cleared = current_domain.process(ClearNotifications(user_id=user_id), asynchronous=False)
    return ClearedResponse(cleared=cleared or 0)
