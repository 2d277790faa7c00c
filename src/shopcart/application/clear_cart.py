"""Application service: Clear Cart use case.

Returns every line's units to stock, then empties the cart and drops its
coupon.  Lines whose product has since been deleted from the catalog have
nowhere to go back to and are skipped.
"""

from __future__ import annotations

import logging

from shopcart.application.compensation import InventoryJournal
from shopcart.application.dto import CartDTO, cart_to_dto
from shopcart.domain.exceptions import ProductNotFoundError
from shopcart.domain.model.stock import variant_key
from shopcart.domain.repository.cart_repository import CartRepository
from shopcart.domain.repository.product_repository import ProductRepository
from shopcart.domain.service.inventory_store import InventoryStore
from shopcart.domain.service.locking import KeyedLock, cart_locks

logger = logging.getLogger(__name__)


class ClearCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        locks: KeyedLock | None = None,
    ) -> None:
        self._cart_repo = cart_repo
        self._inventory = InventoryStore(product_repo)
        self._locks = locks or cart_locks

    def handle(self, user_id: str) -> CartDTO:
        with self._locks.hold(user_id):
            cart = self._cart_repo.get_active_or_raise(user_id)

            journal = InventoryJournal(self._inventory)
            with journal.compensating("clear cart"):
                for item in cart.items:
                    try:
                        journal.release(
                            item.product_id,
                            variant_key(item.size, item.color),
                            item.quantity,
                        )
                    except ProductNotFoundError:
                        logger.warning(
                            "Product %s no longer exists, not restocking %d unit(s)",
                            item.product_id, item.quantity,
                        )
                cart.clear()
                self._cart_repo.save(cart)

        logger.info("User %s cleared cart %s", user_id, cart.id)
        return cart_to_dto(cart)
