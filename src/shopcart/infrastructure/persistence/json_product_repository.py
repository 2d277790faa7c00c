"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import json
import threading
from decimal import Decimal
from pathlib import Path

from shopcart.domain.model.product import Product
from shopcart.domain.model.stock import Stock
from shopcart.domain.model.value_objects import Money
from shopcart.domain.repository.product_repository import ProductRepository


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._io_lock = threading.Lock()
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        with self._io_lock:
            return self._load().get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        with self._io_lock:
            products = self._load()
        for product in products.values():
            if product.name.lower() == name.lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        with self._io_lock:
            return list(self._load().values())

    def save(self, product: Product) -> None:
        with self._io_lock:
            products = self._load()
            products[product.id] = product
            self._persist(products)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return {
            item["id"]: Product(
                id=item["id"],
                name=item["name"],
                price=Money(Decimal(item["price"]), item.get("currency", "USD")),
                stock=Stock.from_raw(item.get("stock", 0)),
                size_options=list(item.get("size_options", [])),
                color_options=list(item.get("color_options", [])),
            )
            for item in raw
        }

    def _persist(self, products: dict[str, Product]) -> None:
        raw = [
            {
                "id": p.id,
                "name": p.name,
                "price": str(p.price.amount),
                "currency": p.price.currency,
                "size_options": p.size_options,
                "color_options": p.color_options,
                "stock": p.stock.to_raw(),
            }
            for p in products.values()
        ]
        self._file_path.write_text(
            json.dumps(raw, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
