"""Storefront settings — pricing, delivery and timeline parameters.

Values default to the storefront's published rules and can be overridden
through ``STOREFRONT_<FIELD>`` environment variables, e.g.
``STOREFRONT_TAX_RATE=0.0725`` or
``STOREFRONT_PROMOTIONS='{"WELCOME5": {"kind": "percent_of_subtotal", "rate": "0.05"}}'``.
"""

from decimal import Decimal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from storefront.pricing.promotions import DEFAULT_PROMOTIONS, PromotionRule, normalize_code


class StorefrontSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STOREFRONT_", frozen=True, extra="ignore")

    # Pricing
    free_shipping_threshold: Decimal = Field(default=Decimal("50.00"), ge=0)
    flat_shipping_fee: Decimal = Field(default=Decimal("9.99"), ge=0)
    tax_rate: Decimal = Field(default=Decimal("0.08"), ge=0)
    cod_fee: Decimal = Field(default=Decimal("2.99"), ge=0)
    currency: str = "USD"
    promotions: dict[str, PromotionRule] = Field(default_factory=lambda: dict(DEFAULT_PROMOTIONS))

    # Orders
    delivery_lead_days: int = Field(default=7, ge=0)

    # Tracking timeline
    processing_offset_hours: int = Field(default=24, ge=0)
    shipping_offset_hours: int = Field(default=48, ge=0)

    @field_validator("promotions", mode="before")
    @classmethod
    def extend_default_promotions(cls, value):
        # Custom codes extend the default table
        return {**DEFAULT_PROMOTIONS, **value}

    @field_validator("promotions")
    @classmethod
    def normalize_promotion_codes(cls, value: dict[str, PromotionRule]) -> dict[str, PromotionRule]:
        return {normalize_code(code): rule for code, rule in value.items()}


_settings: StorefrontSettings | None = None


def get_settings() -> StorefrontSettings:
    """Return the process-wide settings (read from the environment once)."""
    global _settings
    if _settings is None:
        _settings = StorefrontSettings()
    return _settings


def reset_settings():
    """Forget cached settings (useful for testing)."""
    global _settings
    _settings = None
