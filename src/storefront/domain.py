"""Storefront bounded context — shopping cart, pricing, orders, tracking and notifications.

Owns the cart of the active session, derives pricing, converts carts into
persisted orders, advances orders through their status lifecycle and raises
user-facing notifications for cart and order events.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)
