"""Shipment tracking timeline synthesized from an order's status.

There is no carrier feed: milestones are derived from the order alone.
Each milestone uses the time its transition was recorded when known, and
otherwise a fixed offset from creation. A milestone is never placed before
the one preceding it, and the same order always yields the same timeline.
"""

from datetime import timedelta

from protean.fields import DateTime, String

from storefront.config import StorefrontSettings, get_settings
from storefront.domain import storefront
from storefront.order.order import Order, OrderStatus

ORDER_PLACED = "Order Placed"
PROCESSING = "Processing"
SHIPPED = "Shipped"
DELIVERED = "Delivered"
CANCELLED = "Cancelled"

ONLINE = "Online"
WAREHOUSE = "Warehouse - San Francisco, CA"
DISTRIBUTION_CENTER = "Distribution Center - Oakland, CA"

_SHIPPED_STATES = {OrderStatus.SHIPPED, OrderStatus.DELIVERED}


@storefront.value_object
class TrackingEvent:
    timestamp = DateTime(required=True)
    status = String(required=True, max_length=50)
    location = String(required=True, max_length=255)
    description = String(required=True, max_length=500)


def _at_or_after(previous, recorded, fallback):
    when = recorded or fallback
    return max(when, previous)


def build_timeline(order: Order, settings: StorefrontSettings | None = None) -> list[TrackingEvent]:
    """Tracking events for ``order``, most recent first."""
    settings = settings or get_settings()
    status = OrderStatus(order.status)
    created = order.created_at
    processing_offset = timedelta(hours=settings.processing_offset_hours)
    shipping_offset = timedelta(hours=settings.shipping_offset_hours)

    events = [
        TrackingEvent(
            timestamp=created,
            status=ORDER_PLACED,
            location=ONLINE,
            description="Your order has been placed and is being processed",
        )
    ]

    processing_at = _at_or_after(created, order.processing_at, created + processing_offset)
    events.append(
        TrackingEvent(
            timestamp=processing_at,
            status=PROCESSING,
            location=WAREHOUSE,
            description="Your order is being prepared for shipment",
        )
    )

    if status in _SHIPPED_STATES:
        shipped_at = _at_or_after(processing_at, order.shipped_at, created + shipping_offset)
        events.append(
            TrackingEvent(
                timestamp=shipped_at,
                status=SHIPPED,
                location=DISTRIBUTION_CENTER,
                description="Your package has been shipped and is on its way",
            )
        )

        if status is OrderStatus.DELIVERED:
            address = order.shipping_address
            events.append(
                TrackingEvent(
                    timestamp=_at_or_after(shipped_at, order.delivered_at, order.estimated_delivery or shipped_at),
                    status=DELIVERED,
                    location=f"{address.city}, {address.state}",
                    description="Package delivered successfully",
                )
            )

    if status is OrderStatus.CANCELLED:
        events.append(
            TrackingEvent(
                timestamp=_at_or_after(processing_at, order.cancelled_at, processing_at),
                status=CANCELLED,
                location=ONLINE,
                description="Your order has been cancelled",
            )
        )

    events.reverse()
    return events
