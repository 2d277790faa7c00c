"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the outer layers can catch them uniformly and display user-friendly
messages.  The concrete kinds below map one-to-one onto the failures a cart
operation can report to its caller.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


# --- Request-shape errors -----------------------------------------------------


class InvalidQuantityError(ValidationError):
    """Quantity is not a positive integer."""


class InvalidVariantError(ValidationError):
    """Requested size or color is not offered by the product."""


class InvalidProductError(ValidationError):
    """Product data cannot be sold (e.g. non-positive price)."""


# --- Missing entities ---------------------------------------------------------


class ProductNotFoundError(EntityNotFoundError):
    pass


class ItemNotFoundError(EntityNotFoundError):
    pass


class CartNotFoundError(EntityNotFoundError):
    pass


# --- Stock and coupons --------------------------------------------------------


class InsufficientStockError(ValidationError):
    """Not enough units left to satisfy a reservation.

    ``available`` carries the count that *was* available so callers can
    show it to the user.
    """

    def __init__(self, message: str, available: int) -> None:
        super().__init__(message)
        self.available = available


class CouponInvalidError(ValidationError):
    """A coupon was rejected; ``reason`` is the user-facing explanation."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
