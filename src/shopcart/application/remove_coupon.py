"""Application service: Remove Coupon use case."""

from __future__ import annotations

from shopcart.application.dto import CartDTO, cart_to_dto
from shopcart.domain.repository.cart_repository import CartRepository
from shopcart.domain.service.locking import KeyedLock, cart_locks


class RemoveCouponHandler:

    def __init__(self, cart_repo: CartRepository, locks: KeyedLock | None = None) -> None:
        self._cart_repo = cart_repo
        self._locks = locks or cart_locks

    def handle(self, user_id: str) -> CartDTO:
        with self._locks.hold(user_id):
            cart = self._cart_repo.get_active_or_raise(user_id)
            cart.remove_coupon()
            self._cart_repo.save(cart)
        return cart_to_dto(cart)
