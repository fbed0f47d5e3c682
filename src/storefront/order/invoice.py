"""Invoice rendering for placed orders."""

from storefront.order.order import Order
from storefront.pricing.engine import to_currency
from storefront.shared.timestamps import to_iso


def build_invoice(order: Order) -> dict:
    """Invoice record for an order, with amounts as decimal strings."""
    return {
        "invoice_number": f"INV-{order.id}",
        "order_id": str(order.id),
        "issued_at": to_iso(order.created_at),
        "status": order.status,
        "bill_to": order.shipping_address.to_dict(),
        "payment_method": order.payment_method,
        "promotion_code": order.promotion_code,
        "lines": [
            {
                "product_id": item.product_id,
                "description": item.name,
                "quantity": item.quantity,
                "unit_price": str(to_currency(item.unit_price)),
                "line_total": str(to_currency(item.line_total)),
            }
            for item in order.items
        ],
        "totals": order.pricing.to_dict(),
    }
