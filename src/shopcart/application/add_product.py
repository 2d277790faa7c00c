"""Application service: Add Product use case."""

from __future__ import annotations

from shopcart.domain.exceptions import ValidationError
from shopcart.domain.model.product import Product
from shopcart.domain.model.value_objects import Money
from shopcart.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str,
        sizes: list[str] | None = None,
        colors: list[str] | None = None,
    ) -> Product:
        """Add a new product to the catalog.

        Products with any size or color options get per-variant stock;
        all others get a single count.  Stock starts at zero either way.
        """
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        existing = self._product_repo.get_by_name(name.strip())
        if existing is not None:
            raise ValidationError(f"Product '{name}' already exists")

        money = Money.of(price)
        if not money.is_positive:
            raise ValidationError("Product price must be greater than zero")

        # Auto-assign ID based on existing products
        all_products = self._product_repo.list_all()
        if all_products:
            next_id = str(max(int(p.id) for p in all_products) + 1)
        else:
            next_id = "1"

        product = Product.create(next_id, name, money, sizes, colors)
        self._product_repo.save(product)
        return product
