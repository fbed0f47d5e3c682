"""Pricing engine — pure functions deriving cart and order amounts.

The same functions price the cart page and the order at checkout, so the two
can never disagree. Arithmetic is done in ``Decimal`` and left unrounded;
rounding to currency precision (ROUND_HALF_UP) happens only when a breakdown
is displayed or recorded, via ``PriceBreakdown.rounded()``.

Line items are duck-typed: anything exposing ``unit_price`` and
``quantity`` (cart items, order items) can be priced.
"""

from collections.abc import Iterable
from dataclasses import dataclass, fields, replace
from decimal import ROUND_HALF_UP, Decimal

from storefront.config import StorefrontSettings, get_settings
from storefront.pricing.promotions import lookup, normalize_code
from storefront.shared.payment import PaymentMethod

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value) -> Decimal:
    """Convert a stored amount (float, int, str or Decimal) to an exact Decimal."""
    if isinstance(value, Decimal):
        return value
    if value is None:
        return ZERO
    # str() first so that 19.99 stays 19.99 instead of its binary expansion
    return Decimal(str(value))


def to_currency(amount) -> Decimal:
    """Round an amount to currency precision, half up."""
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: Decimal
    shipping_fee: Decimal
    tax: Decimal
    discount: Decimal
    payment_fee: Decimal
    total: Decimal
    promotion_code: str | None = None

    def rounded(self) -> "PriceBreakdown":
        return replace(
            self,
            **{f.name: to_currency(getattr(self, f.name)) for f in fields(self) if f.name != "promotion_code"},
        )

    def to_dict(self) -> dict:
        """Display record: amounts rounded and rendered as decimal strings."""
        display = self.rounded()
        record = {f.name: str(getattr(display, f.name)) for f in fields(display) if f.name != "promotion_code"}
        record["promotion_code"] = self.promotion_code
        return record


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------
def subtotal(items: Iterable) -> Decimal:
    """Sum of ``unit_price * quantity`` over the line items."""
    return sum((to_decimal(item.unit_price) * item.quantity for item in items), ZERO)


def shipping_fee(amount: Decimal, settings: StorefrontSettings | None = None) -> Decimal:
    """Flat fee unless the subtotal strictly exceeds the free-shipping threshold."""
    settings = settings or get_settings()
    if to_decimal(amount) > settings.free_shipping_threshold:
        return ZERO
    return settings.flat_shipping_fee


def tax(amount: Decimal, settings: StorefrontSettings | None = None) -> Decimal:
    settings = settings or get_settings()
    return to_decimal(amount) * settings.tax_rate


def apply_promotion(
    code: str | None,
    amount: Decimal,
    fee: Decimal,
    settings: StorefrontSettings | None = None,
) -> Decimal:
    """Discount granted by a promotion code; unknown codes grant nothing."""
    settings = settings or get_settings()
    rule = lookup(code, settings.promotions)
    if rule is None:
        return ZERO
    return rule.discount(to_decimal(amount), to_decimal(fee))


def payment_surcharge(payment_method, settings: StorefrontSettings | None = None) -> Decimal:
    """Handling fee charged for a payment method (cash on delivery only)."""
    settings = settings or get_settings()
    if payment_method is None:
        return ZERO
    method = PaymentMethod.parse(payment_method)
    if method is PaymentMethod.CASH_ON_DELIVERY:
        return settings.cod_fee
    return ZERO


def grand_total(
    amount: Decimal,
    fee: Decimal,
    tax_amount: Decimal,
    discount: Decimal,
    extra_fee: Decimal = ZERO,
) -> Decimal:
    return to_decimal(amount) + to_decimal(fee) + to_decimal(tax_amount) - to_decimal(discount) + to_decimal(extra_fee)


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------
def price(
    items: Iterable,
    promotion_code: str | None = None,
    payment_method=None,
    settings: StorefrontSettings | None = None,
) -> PriceBreakdown:
    """Price a list of line items end to end."""
    settings = settings or get_settings()

    items_subtotal = subtotal(items)
    fee = shipping_fee(items_subtotal, settings)
    tax_amount = tax(items_subtotal, settings)
    discount = apply_promotion(promotion_code, items_subtotal, fee, settings)
    surcharge = payment_surcharge(payment_method, settings)

    code = normalize_code(promotion_code)
    return PriceBreakdown(
        subtotal=items_subtotal,
        shipping_fee=fee,
        tax=tax_amount,
        discount=discount,
        payment_fee=surcharge,
        total=grand_total(items_subtotal, fee, tax_amount, discount, surcharge),
        promotion_code=code if lookup(code, settings.promotions) else None,
    )
