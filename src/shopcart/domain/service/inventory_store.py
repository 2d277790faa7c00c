"""Domain service: Inventory Store.

Moves units in and out of a product's stock on behalf of carts.  Every
movement is a read-check-write of the whole product document, done under
a per-product lock and saved immediately (no batching), so a crash right
after ``reserve`` leaves the units reserved even if the caller never gets
to write its cart.

Callers pass a variant key for every call; products with scalar stock
simply ignore it, so no caller ever branches on how stock is stored.
"""

from __future__ import annotations

import logging

from shopcart.domain.exceptions import ProductNotFoundError
from shopcart.domain.model.product import Product
from shopcart.domain.repository.product_repository import ProductRepository
from shopcart.domain.service.locking import KeyedLock, product_locks

logger = logging.getLogger(__name__)


class InventoryStore:

    def __init__(
        self,
        product_repo: ProductRepository,
        locks: KeyedLock | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._locks = locks or product_locks

    def get_available(self, product_id: str, variant_key: str | None = None) -> int:
        """Units currently available; 0 for an unknown variant key."""
        return self._load(product_id).stock.available(variant_key)

    def reserve(self, product_id: str, variant_key: str | None, amount: int) -> int:
        """Take *amount* units out of stock and persist.

        Raises InsufficientStockError (nothing is written) when fewer than
        *amount* units are available.  Returns the new available count.
        """
        with self._locks.hold(product_id):
            product = self._load(product_id)
            product.stock = product.stock.reserve(variant_key, amount)
            self._product_repo.save(product)
            remaining = product.stock.available(variant_key)
        logger.debug(
            "Reserved %d of %s [%s], %d left", amount, product_id, variant_key, remaining
        )
        return remaining

    def release(self, product_id: str, variant_key: str | None, amount: int) -> int:
        """Return *amount* units to stock and persist.

        Returns the new available count.
        """
        with self._locks.hold(product_id):
            product = self._load(product_id)
            product.stock = product.stock.release(variant_key, amount)
            self._product_repo.save(product)
            remaining = product.stock.available(variant_key)
        logger.debug(
            "Released %d of %s [%s], %d now available",
            amount, product_id, variant_key, remaining,
        )
        return remaining

    def _load(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError("Product not found")
        return product
