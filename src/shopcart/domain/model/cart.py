"""Cart aggregate — one user's basket of line items.

The Cart is an aggregate root that owns its line items, its applied
coupon and its cached totals.  Totals are never computed on read:
every mutating method ends by calling ``recompute_totals()`` so the
stored ``total_amount`` / ``total_items`` always agree with the items.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from shopcart.domain.exceptions import ItemNotFoundError, ValidationError
from shopcart.domain.model.value_objects import ZERO, finite_or_zero

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CartStatus(Enum):
    ACTIVE = "active"
    ABANDONED = "abandoned"
    CONVERTED = "converted"


@dataclass
class CartLineItem:
    """A product variant in the cart.

    ``price`` is the unit price captured when the line was first added;
    later catalog price changes do not touch it.
    """

    product_id: str
    quantity: int
    price: Decimal
    subtotal: Decimal
    size: str | None = None
    color: str | None = None

    def matches(self, product_id: str, size: str | None, color: str | None) -> bool:
        return (
            self.product_id == product_id
            and self.size == size
            and self.color == color
        )

    def set_quantity(self, quantity: int) -> None:
        if quantity < 1:
            raise ValidationError("Line quantity must be at least 1")
        self.quantity = quantity
        self.subtotal = self.price * quantity


@dataclass(frozen=True)
class AppliedCoupon:
    code: str
    discount: Decimal


@dataclass
class Cart:
    """Aggregate root for shopping carts.

    Invariants (after every public mutation):
    - ``total_items`` == sum of line quantities
    - ``total_amount`` == max(0, sum of line subtotals - coupon discount)
    """

    id: str
    user_id: str
    items: list[CartLineItem] = field(default_factory=list)
    status: CartStatus = CartStatus.ACTIVE
    applied_coupon: AppliedCoupon | None = None
    total_amount: Decimal = ZERO
    total_items: int = 0
    last_updated: datetime = field(default_factory=_utcnow)

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def open_for(user_id: str) -> Cart:
        """Start a new, empty, active cart for *user_id*."""
        if not user_id:
            raise ValidationError("A user id is required to open a cart")
        return Cart(id=uuid.uuid4().hex, user_id=user_id)

    # --- Line items -----------------------------------------------------------

    def find_item(
        self, product_id: str, size: str | None, color: str | None
    ) -> CartLineItem | None:
        for item in self.items:
            if item.matches(product_id, size, color):
                return item
        return None

    def get_item(
        self, product_id: str, size: str | None, color: str | None
    ) -> CartLineItem:
        item = self.find_item(product_id, size, color)
        if item is None:
            raise ItemNotFoundError("Item not found in cart")
        return item

    def add_item(
        self,
        product_id: str,
        quantity: int,
        unit_price: Decimal,
        size: str | None = None,
        color: str | None = None,
    ) -> CartLineItem:
        """Add units of a variant, merging into an existing matching line."""
        self._assert_active()
        item = self.find_item(product_id, size, color)
        if item is not None:
            item.set_quantity(item.quantity + quantity)
        else:
            item = CartLineItem(
                product_id=product_id,
                quantity=quantity,
                price=unit_price,
                subtotal=unit_price * quantity,
                size=size,
                color=color,
            )
            self.items.append(item)
        self.recompute_totals()
        return item

    def set_item_quantity(
        self, product_id: str, size: str | None, color: str | None, quantity: int
    ) -> None:
        self._assert_active()
        self.get_item(product_id, size, color).set_quantity(quantity)
        self.recompute_totals()

    def remove_item(
        self, product_id: str, size: str | None, color: str | None
    ) -> CartLineItem:
        self._assert_active()
        item = self.get_item(product_id, size, color)
        self.items.remove(item)
        self.recompute_totals()
        return item

    def clear(self) -> list[CartLineItem]:
        """Empty the cart and drop any coupon; returns the removed lines."""
        self._assert_active()
        removed, self.items = self.items, []
        self.applied_coupon = None
        self.recompute_totals()
        return removed

    # --- Coupons --------------------------------------------------------------

    def apply_coupon(self, code: str, discount: Decimal) -> None:
        self._assert_active()
        self.applied_coupon = AppliedCoupon(code=code, discount=discount)
        self.recompute_totals()

    def remove_coupon(self) -> None:
        self._assert_active()
        self.applied_coupon = None
        self.recompute_totals()

    # --- Totals ---------------------------------------------------------------

    @property
    def subtotal(self) -> Decimal:
        """Sum of line subtotals before any coupon discount."""
        total = ZERO
        for item in self.items:
            value = finite_or_zero(item.subtotal)
            if value == ZERO and item.subtotal != ZERO:
                logger.warning(
                    "Invalid subtotal %r for %s in cart %s, counting as 0",
                    item.subtotal, item.product_id, self.id,
                )
            total += value
        return total

    def recompute_totals(self, now: datetime | None = None) -> None:
        self.total_items = sum(int(item.quantity or 0) for item in self.items)

        amount = self.subtotal
        if self.applied_coupon is not None:
            discount = finite_or_zero(self.applied_coupon.discount)
            amount = max(ZERO, amount - discount)
        self.total_amount = amount

        self.last_updated = now or _utcnow()

    @property
    def is_empty(self) -> bool:
        return not self.items

    # --- Internal helpers -----------------------------------------------------

    def _assert_active(self) -> None:
        if self.status != CartStatus.ACTIVE:
            raise ValidationError(
                f"Cannot modify cart in {self.status.value} status"
            )
