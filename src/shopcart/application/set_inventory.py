"""Application service: Set Inventory use case.

Overwrites a stock count directly.  This is an operator tool for
receiving goods or correcting counts, not part of the cart flow.
"""

from __future__ import annotations

from shopcart.domain.exceptions import ProductNotFoundError, ValidationError
from shopcart.domain.model.stock import VariantStock, variant_key
from shopcart.domain.repository.product_repository import ProductRepository
from shopcart.domain.service.locking import KeyedLock, product_locks


class SetInventoryHandler:

    def __init__(
        self, product_repo: ProductRepository, locks: KeyedLock | None = None
    ) -> None:
        self._product_repo = product_repo
        self._locks = locks or product_locks

    def handle(
        self,
        product_id: str,
        quantity: int,
        size: str | None = None,
        color: str | None = None,
    ) -> None:
        with self._locks.hold(product_id):
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise ProductNotFoundError(f"Product with ID '{product_id}' not found")

            if isinstance(product.stock, VariantStock):
                if not size and not color:
                    raise ValidationError(
                        f"Product '{product.name}' is stocked per variant; "
                        f"give a size and/or color"
                    )
                product.validate_variant(size, color)

            product.stock = product.stock.set(variant_key(size, color), quantity)
            self._product_repo.save(product)
