"""Notification templates — title and message for each kind of notification.

Each template renders a ``{"title", "message"}`` dict from a context dict.
Order updates are keyed by the order's status.
"""

from storefront.notification.notification import NotificationType


class OrderPlacedTemplate:
    notification_type = NotificationType.ORDER_UPDATE.value

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "Order Placed",
            "message": (
                f"Your order {context['order_id']} has been placed. "
                f"Track it with {context['tracking_number']}."
            ),
        }


class OrderProcessingTemplate:
    notification_type = NotificationType.ORDER_UPDATE.value

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "Order Processing",
            "message": f"Your order {context['order_id']} is being prepared for shipment.",
        }


class OrderShippedTemplate:
    notification_type = NotificationType.ORDER_UPDATE.value

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "Order Shipped",
            "message": (
                f"Your order {context['order_id']} has shipped. "
                f"Tracking number: {context['tracking_number']}."
            ),
        }


class OrderDeliveredTemplate:
    notification_type = NotificationType.ORDER_UPDATE.value

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "Order Delivered",
            "message": f"Your order {context['order_id']} has been delivered. Enjoy!",
        }


class OrderCancelledTemplate:
    notification_type = NotificationType.ORDER_UPDATE.value

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "Order Cancelled",
            "message": f"Your order {context['order_id']} has been cancelled.",
        }


class CartReminderTemplate:
    notification_type = NotificationType.CART_REMINDER.value

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "Added to cart",
            "message": (
                f"{context['product_name']} is waiting in your cart. "
                "Check out before it sells out!"
            ),
        }


class PromotionTemplate:
    notification_type = NotificationType.PROMOTION.value

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "Promotion applied",
            "message": f"Promo code {context['promotion_code']} has been applied to your cart.",
        }


ORDER_STATUS_TEMPLATES: dict[str, type] = {
    "pending": OrderPlacedTemplate,
    "processing": OrderProcessingTemplate,
    "shipped": OrderShippedTemplate,
    "delivered": OrderDeliveredTemplate,
    "cancelled": OrderCancelledTemplate,
}


def template_for_status(status: str):
    """Look up the order update template for an order status."""
    template_cls = ORDER_STATUS_TEMPLATES.get(status)
    if template_cls is None:
        raise ValueError(f"No template registered for order status: {status}")
    return template_cls
