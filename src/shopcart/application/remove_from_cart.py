"""Application service: Remove From Cart use case."""

from __future__ import annotations

import logging

from shopcart.application.compensation import InventoryJournal
from shopcart.application.dto import CartDTO, cart_to_dto
from shopcart.domain.model.stock import variant_key
from shopcart.domain.repository.cart_repository import CartRepository
from shopcart.domain.repository.product_repository import ProductRepository
from shopcart.domain.service.inventory_store import InventoryStore
from shopcart.domain.service.locking import KeyedLock, cart_locks

logger = logging.getLogger(__name__)


class RemoveFromCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        locks: KeyedLock | None = None,
    ) -> None:
        self._cart_repo = cart_repo
        self._inventory = InventoryStore(product_repo)
        self._locks = locks or cart_locks

    def handle(
        self,
        user_id: str,
        product_id: str,
        size: str | None = None,
        color: str | None = None,
    ) -> CartDTO:
        """Drop a line from the cart and return all its units to stock."""
        with self._locks.hold(user_id):
            cart = self._cart_repo.get_active_or_raise(user_id)
            item = cart.get_item(product_id, size, color)

            journal = InventoryJournal(self._inventory)
            with journal.compensating("remove from cart"):
                journal.release(product_id, variant_key(size, color), item.quantity)
                cart.remove_item(product_id, size, color)
                self._cart_repo.save(cart)

        logger.info("User %s removed %s (%s/%s)", user_id, product_id, size, color)
        return cart_to_dto(cart)
