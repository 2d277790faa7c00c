"""Coupon aggregate.

In the cart flow a coupon's ``discount`` is a flat amount taken off the
cart subtotal.  The cart flow only *reads* coupons; recording who
redeemed one (``used_by``) belongs to whichever flow finalizes an order.
"""

from __future__ import annotations

import random
import string
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from shopcart.domain.exceptions import ValidationError
from shopcart.domain.model.value_objects import ZERO

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_MIN_LENGTH = 5
CODE_MAX_LENGTH = 10
DISCOUNT_MIN = 5
DISCOUNT_MAX = 50


def normalize_code(code: str) -> str:
    return code.strip().upper()


@dataclass
class Coupon:
    """A promotional code.

    ``max_uses`` of ``None`` means the coupon can be redeemed any number
    of times.
    """

    code: str
    discount: Decimal
    valid_until: datetime
    max_uses: int | None = None
    used_by: list[str] = field(default_factory=list)
    min_purchase: Decimal = ZERO
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        self.code = normalize_code(self.code)
        if not self.code:
            raise ValidationError("Coupon code is required")
        if self.discount < ZERO:
            raise ValidationError("Coupon discount cannot be negative")
        if self.min_purchase < ZERO:
            raise ValidationError("Minimum purchase cannot be negative")
        if self.max_uses is not None and self.max_uses < 1:
            raise ValidationError("Coupon max uses must be at least 1")

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def generate(
        now: datetime,
        valid_days: int = 30,
        max_uses: int | None = None,
        min_purchase: Decimal = ZERO,
        rng: random.Random | None = None,
    ) -> Coupon:
        """Create a coupon with a random code and a random discount.

        The code is not checked for uniqueness here; the caller retries
        until the repository has no coupon with that code.
        """
        rng = rng or random.Random()
        length = rng.randint(CODE_MIN_LENGTH, CODE_MAX_LENGTH)
        code = "".join(rng.choice(CODE_ALPHABET) for _ in range(length))
        return Coupon(
            code=code,
            discount=Decimal(rng.randint(DISCOUNT_MIN, DISCOUNT_MAX)),
            valid_until=now + timedelta(days=valid_days),
            max_uses=max_uses,
            min_purchase=min_purchase,
            created_at=now,
        )

    # --- Queries --------------------------------------------------------------

    def is_expired(self, now: datetime) -> bool:
        return self.valid_until < now

    def was_used_by(self, user_id: str) -> bool:
        return user_id in self.used_by

    @property
    def usage_limit_reached(self) -> bool:
        return self.max_uses is not None and len(self.used_by) >= self.max_uses
