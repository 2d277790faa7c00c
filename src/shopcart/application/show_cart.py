"""Application service: Show Cart use case (query).

Viewing a cart opens one for users who do not have one yet, so it takes
the same per-user lock as the mutating cart use cases.
"""

from __future__ import annotations

from shopcart.application.dto import CartDTO, cart_to_dto
from shopcart.domain.repository.cart_repository import CartRepository
from shopcart.domain.service.locking import KeyedLock, cart_locks


class ShowCartHandler:

    def __init__(self, cart_repo: CartRepository, locks: KeyedLock | None = None) -> None:
        self._cart_repo = cart_repo
        self._locks = locks or cart_locks

    def handle(self, user_id: str) -> CartDTO:
        with self._locks.hold(user_id):
            cart = self._cart_repo.get_or_create_active(user_id)
        return cart_to_dto(cart)
