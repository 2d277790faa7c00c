"""Application service: Update Product use case."""

from __future__ import annotations

from shopcart.domain.exceptions import ProductNotFoundError
from shopcart.domain.model.value_objects import Money
from shopcart.domain.repository.product_repository import ProductRepository
from shopcart.domain.service.locking import KeyedLock, product_locks


class UpdateProductHandler:

    def __init__(
        self, product_repo: ProductRepository, locks: KeyedLock | None = None
    ) -> None:
        self._product_repo = product_repo
        self._locks = locks or product_locks

    def handle(self, product_id: str, new_price: str) -> None:
        """Update a product's price.

        This does NOT affect lines already in carts — they captured a
        price snapshot when added.
        """
        with self._locks.hold(product_id):
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise ProductNotFoundError(f"Product with ID '{product_id}' not found")

            product.update_price(Money.of(new_price))
            self._product_repo.save(product)
