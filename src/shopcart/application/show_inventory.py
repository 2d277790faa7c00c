"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from shopcart.domain.model.stock import VariantStock
from shopcart.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class InventoryLineDTO:
    product_id: str
    product_name: str
    variant: str  # "" for products stocked as a single count
    available: int


class ShowInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self) -> list[InventoryLineDTO]:
        lines: list[InventoryLineDTO] = []
        for product in self._product_repo.list_all():
            stock = product.stock
            if isinstance(stock, VariantStock):
                for key in sorted(stock.counts):
                    lines.append(
                        InventoryLineDTO(product.id, product.name, key, stock.counts[key])
                    )
            else:
                lines.append(
                    InventoryLineDTO(product.id, product.name, "", stock.available())
                )
        return lines
