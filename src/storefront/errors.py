"""Typed errors raised by the storefront domain.

Every error carries a ``kind`` so callers can branch on the category
without parsing messages, and a ``messages`` dict shaped like Protean's
``ValidationError`` (``{field: [message, ...]}``).
"""

from enum import Enum


class ErrorKind(Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    PERSISTENCE = "persistence"


class StorefrontError(Exception):
    """Base exception for all storefront errors."""

    kind: ErrorKind
    retryable = False

    def __init__(self, messages: dict[str, list[str]]):
        self.messages = messages
        super().__init__(messages)

    def __str__(self) -> str:
        return "; ".join(f"{field}: {', '.join(msgs)}" for field, msgs in self.messages.items())


# ---------------------------------------------------------------------------
# Validation: user-correctable input problems
# ---------------------------------------------------------------------------
class ValidationError(StorefrontError):
    kind = ErrorKind.VALIDATION


class EmptyCartError(ValidationError):
    """Raised when checking out a cart without items."""

    def __init__(self):
        super().__init__({"cart": ["Cannot place an order from an empty cart"]})


class InvalidAddressError(ValidationError):
    """Raised when a shipping address is missing a required field."""

    def __init__(self, field: str):
        self.field = field
        super().__init__({field: [f"Shipping address field '{field}' is required"]})


class InvalidQuantityError(ValidationError):
    def __init__(self, quantity):
        self.quantity = quantity
        super().__init__({"quantity": [f"Quantity must be at least 1, got {quantity}"]})


class InvalidStatusError(ValidationError):
    """Raised when a value is not one of the order statuses."""

    def __init__(self, status):
        self.status = status
        super().__init__({"status": [f"Unknown order status: {status}"]})


class InvalidPaymentMethodError(ValidationError):
    def __init__(self, payment_method):
        self.payment_method = payment_method
        super().__init__({"payment_method": [f"Unknown payment method: {payment_method}"]})


# ---------------------------------------------------------------------------
# Not found
# ---------------------------------------------------------------------------
class NotFoundError(StorefrontError):
    kind = ErrorKind.NOT_FOUND


class OrderNotFoundError(NotFoundError):
    """Raised when an order id or tracking number is unknown."""

    def __init__(self, key: str, field: str = "order_id"):
        self.key = key
        self.field = field
        super().__init__({field: [f"Order not found: {key}"]})


# ---------------------------------------------------------------------------
# Conflicts: the attempted mutation has no effect
# ---------------------------------------------------------------------------
class ConflictError(StorefrontError):
    kind = ErrorKind.CONFLICT


class DuplicateOrderError(ConflictError):
    def __init__(self, key: str, field: str = "order_id"):
        self.key = key
        self.field = field
        super().__init__({field: [f"An order with {field} {key} already exists"]})


class InvalidTransitionError(ConflictError):
    """Raised when an order status change is not in the transition graph."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__({"status": [f"Cannot transition from {current} to {target}"]})


# ---------------------------------------------------------------------------
# Persistence: the underlying store is unavailable
# ---------------------------------------------------------------------------
class PersistenceError(StorefrontError):
    kind = ErrorKind.PERSISTENCE
    retryable = True

    def __init__(self, operation: str, key: str, reason: str):
        self.operation = operation
        self.key = key
        self.reason = reason
        super().__init__({"store": [f"{operation} {key!r} failed: {reason}"]})
