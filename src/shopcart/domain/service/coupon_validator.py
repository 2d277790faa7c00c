"""Domain service: Coupon Validator.

Decides whether a coupon can be applied to a cart.  The checks run in a
fixed order and the first failing one decides the reason, so a coupon
that is both expired and already used reports "expired".

The validator never mutates the coupon.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

from shopcart.domain.model.coupon import normalize_code
from shopcart.domain.model.value_objects import ZERO
from shopcart.domain.repository.coupon_repository import CouponRepository

NOT_FOUND = "Coupon not found"
EXPIRED = "Coupon has expired"
ALREADY_USED = "Coupon already used by this user"
LIMIT_REACHED = "Coupon usage limit reached"
APPLIED = "Coupon applied successfully"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CouponDecision:
    is_valid: bool
    reason: str
    code: str = ""
    discount: Decimal = ZERO

    @staticmethod
    def reject(reason: str) -> CouponDecision:
        return CouponDecision(is_valid=False, reason=reason)


class CouponValidator:

    def __init__(
        self,
        coupon_repo: CouponRepository,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._coupon_repo = coupon_repo
        self._clock = clock or _utcnow

    def validate(self, code: str, user_id: str, cart_total: Decimal) -> CouponDecision:
        """Check *code* for *user_id* against a pre-discount cart total.

        Order: not found, expired, already used by this user, usage
        limit reached, minimum purchase not met.
        """
        coupon = self._coupon_repo.get_by_code(normalize_code(code))
        if coupon is None:
            return CouponDecision.reject(NOT_FOUND)

        if coupon.is_expired(self._clock()):
            return CouponDecision.reject(EXPIRED)

        if coupon.was_used_by(user_id):
            return CouponDecision.reject(ALREADY_USED)

        if coupon.usage_limit_reached:
            return CouponDecision.reject(LIMIT_REACHED)

        if cart_total < coupon.min_purchase:
            return CouponDecision.reject(
                f"Minimum purchase of {coupon.min_purchase} required"
            )

        return CouponDecision(
            is_valid=True,
            reason=APPLIED,
            code=coupon.code,
            discount=coupon.discount,
        )
