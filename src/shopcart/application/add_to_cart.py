"""Application service: Add To Cart use case.

Validates the request against the catalog, reserves the units, then
merges them into the user's active cart (opening one if needed).
Stock is reserved before the cart is written; if the cart write fails
the reservation is released again.
"""

from __future__ import annotations

import logging

from shopcart.application.compensation import InventoryJournal
from shopcart.application.dto import CartDTO, cart_to_dto
from shopcart.domain.exceptions import InvalidProductError, ProductNotFoundError
from shopcart.domain.model.stock import variant_key
from shopcart.domain.model.value_objects import require_quantity
from shopcart.domain.repository.cart_repository import CartRepository
from shopcart.domain.repository.product_repository import ProductRepository
from shopcart.domain.service.inventory_store import InventoryStore
from shopcart.domain.service.locking import KeyedLock, cart_locks

logger = logging.getLogger(__name__)


class AddToCartHandler:

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
        """Add *quantity* units of a product variant to the user's cart.

        Steps:
        1. Reject a quantity that is not a positive integer.
        2. Reject a missing product or one without a positive price.
        3. Reject a size/color the product is not offered in.
        4. Reserve the units (fails with the available count).
        5. Merge into the matching line or append a new one at the
           current price, recompute totals and persist.
        """
        quantity = require_quantity(quantity)

        with self._locks.hold(user_id):
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise ProductNotFoundError("Product not found")
            if not product.price.is_positive:
                raise InvalidProductError("Invalid product price")
            product.validate_variant(size, color)

            journal = InventoryJournal(self._inventory)
            with journal.compensating("add to cart"):
                journal.reserve(product_id, variant_key(size, color), quantity)

                cart = self._cart_repo.get_or_create_active(user_id)
                cart.add_item(
                    product_id=product_id,
                    quantity=quantity,
                    unit_price=product.price.amount,
                    size=size,
                    color=color,
                )
                self._cart_repo.save(cart)

        logger.info(
            "User %s added %d x %s (%s/%s)", user_id, quantity, product_id, size, color
        )
        return cart_to_dto(cart)
