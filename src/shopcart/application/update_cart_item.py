"""Application service: Update Cart Item use case.

Sets a line to a new quantity and moves only the difference in or out of
stock.  A quantity of zero or less removes the line and returns all of
its units.
"""

from __future__ import annotations

import logging

from shopcart.application.compensation import InventoryJournal
from shopcart.application.dto import CartDTO, cart_to_dto
from shopcart.domain.exceptions import InvalidQuantityError, ProductNotFoundError
from shopcart.domain.model.stock import variant_key
from shopcart.domain.repository.cart_repository import CartRepository
from shopcart.domain.repository.product_repository import ProductRepository
from shopcart.domain.service.inventory_store import InventoryStore
from shopcart.domain.service.locking import KeyedLock, cart_locks

logger = logging.getLogger(__name__)


class UpdateCartItemHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        locks: KeyedLock | None = None,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._inventory = InventoryStore(product_repo)
        self._locks = locks or cart_locks

    def handle(
        self,
        user_id: str,
        product_id: str,
        quantity: int,
        size: str | None = None,
        color: str | None = None,
    ) -> CartDTO:
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise InvalidQuantityError("Quantity must be an integer")

        with self._locks.hold(user_id):
            cart = self._cart_repo.get_active_or_raise(user_id)
            item = cart.get_item(product_id, size, color)

            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise ProductNotFoundError("Product not found")
            key = variant_key(item.size, item.color)

            journal = InventoryJournal(self._inventory)
            if quantity <= 0:
                with journal.compensating("remove cart item"):
                    journal.release(product_id, key, item.quantity)
                    cart.remove_item(product_id, size, color)
                    self._cart_repo.save(cart)
            else:
                product.validate_variant(size, color)
                delta = quantity - item.quantity
                with journal.compensating("update cart item"):
                    # A failed reserve raises before anything is recorded.
                    if delta > 0:
                        journal.reserve(product_id, key, delta)
                    elif delta < 0:
                        journal.release(product_id, key, -delta)
                    cart.set_item_quantity(product_id, size, color, quantity)
                    self._cart_repo.save(cart)

        logger.info(
            "User %s set %s (%s/%s) to %d", user_id, product_id, size, color, quantity
        )
        return cart_to_dto(cart)
