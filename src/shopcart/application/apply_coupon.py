"""Application service: Apply Coupon use case.

The coupon is validated against the cart's subtotal *before* any
discount, so swapping one coupon for another is judged on what the
items actually cost.  Applying a coupon does not record a redemption.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from shopcart.application.dto import CartDTO, cart_to_dto
from shopcart.domain.exceptions import CouponInvalidError
from shopcart.domain.repository.cart_repository import CartRepository
from shopcart.domain.repository.coupon_repository import CouponRepository
from shopcart.domain.service.coupon_validator import CouponValidator
from shopcart.domain.service.locking import KeyedLock, cart_locks

logger = logging.getLogger(__name__)


class ApplyCouponHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        coupon_repo: CouponRepository,
        clock: Callable[[], datetime] | None = None,
        locks: KeyedLock | None = None,
    ) -> None:
        self._cart_repo = cart_repo
        self._validator = CouponValidator(coupon_repo, clock)
        self._locks = locks or cart_locks

    def handle(self, user_id: str, code: str) -> CartDTO:
        with self._locks.hold(user_id):
            cart = self._cart_repo.get_active_or_raise(user_id)

            decision = self._validator.validate(code, user_id, cart.subtotal)
            if not decision.is_valid:
                raise CouponInvalidError(decision.reason)

            cart.apply_coupon(decision.code, decision.discount)
            self._cart_repo.save(cart)

        logger.info("User %s applied coupon %s", user_id, decision.code)
        return cart_to_dto(cart)
