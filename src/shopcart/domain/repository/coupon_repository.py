"""Abstract repository for Coupon aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shopcart.domain.model.coupon import Coupon


class CouponRepository(ABC):

    @abstractmethod
    def get_by_code(self, code: str) -> Coupon | None:
        """Return the coupon with this (already normalized) code, or None."""

    @abstractmethod
    def save(self, coupon: Coupon) -> None:
        """Persist a new or updated coupon."""
