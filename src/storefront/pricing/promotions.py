"""Promotion code table — maps a code to a discount rule.

Rules are data, not code: adding a code means adding an entry to the
``promotions`` setting, never touching the pricing algorithm.
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PromotionKind(str, Enum):
    PERCENT_OF_SUBTOTAL = "percent_of_subtotal"
    SHIPPING_WAIVER = "shipping_waiver"


class PromotionRule(BaseModel):
    """A single discount rule.

    ``rate`` is the fraction of the subtotal taken off for
    ``percent_of_subtotal`` rules and is ignored for shipping waivers.
    """

    model_config = ConfigDict(frozen=True)

    kind: PromotionKind
    rate: Decimal = Field(default=Decimal("0"), ge=0, le=1)
    description: str = ""

    def discount(self, subtotal: Decimal, shipping_fee: Decimal) -> Decimal:
        if self.kind is PromotionKind.PERCENT_OF_SUBTOTAL:
            return subtotal * self.rate
        return shipping_fee


DEFAULT_PROMOTIONS: dict[str, PromotionRule] = {
    "SAVE10": PromotionRule(
        kind=PromotionKind.PERCENT_OF_SUBTOTAL,
        rate=Decimal("0.10"),
        description="10% off your subtotal",
    ),
    "FREESHIP": PromotionRule(
        kind=PromotionKind.SHIPPING_WAIVER,
        description="Free shipping",
    ),
}


def normalize_code(code: str | None) -> str:
    """Promotion codes are matched case-insensitively, ignoring surrounding blanks."""
    return (code or "").strip().upper()


def lookup(code: str | None, table: dict[str, PromotionRule]) -> PromotionRule | None:
    normalized = normalize_code(code)
    if not normalized:
        return None
    return table.get(normalized)
