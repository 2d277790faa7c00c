"""Application service: Generate Coupon use case (admin).

Draws random codes until one is free, then stores a coupon with a random
flat discount between 5 and 50.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from datetime import datetime, timezone

from shopcart.domain.exceptions import ValidationError
from shopcart.domain.model.coupon import Coupon
from shopcart.domain.model.value_objects import Money
from shopcart.domain.repository.coupon_repository import CouponRepository

logger = logging.getLogger(__name__)


class GenerateCouponHandler:

    def __init__(
        self,
        coupon_repo: CouponRepository,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
        rng: random.Random | None = None,
    ) -> None:
        self._coupon_repo = coupon_repo
        self._clock = clock
        self._rng = rng or random.Random()

    def handle(
        self,
        valid_days: int = 30,
        max_uses: int | None = None,
        min_purchase: str = "0",
    ) -> Coupon:
        if valid_days < 1:
            raise ValidationError("Coupon must be valid for at least one day")
        minimum = Money.of(min_purchase).amount

        now = self._clock()
        coupon = Coupon.generate(now, valid_days, max_uses, minimum, self._rng)
        while self._coupon_repo.get_by_code(coupon.code) is not None:
            coupon = Coupon.generate(now, valid_days, max_uses, minimum, self._rng)

        self._coupon_repo.save(coupon)
        logger.info(
            "Generated coupon %s (%s off, valid until %s)",
            coupon.code, coupon.discount, coupon.valid_until.isoformat(),
        )
        return coupon
