"""Payment methods accepted at checkout.

Payment is recorded on the order, never executed.
"""

from enum import Enum

from storefront.errors import InvalidPaymentMethodError


class PaymentMethod(Enum):
    CARD = "card"
    GOOGLE_PAY = "googlepay"
    CASH_ON_DELIVERY = "cod"

    @classmethod
    def parse(cls, value) -> "PaymentMethod":
        """Coerce a stored or submitted value; raises InvalidPaymentMethodError."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidPaymentMethodError(value) from None
