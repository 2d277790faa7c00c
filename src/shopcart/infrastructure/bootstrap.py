"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

Settings come from the environment (optionally seeded from a ``.env``
file) and are read each time a factory is called:

- ``SHOPCART_DATA_DIR``: directory holding the JSON documents.
- ``SHOPCART_LOG_LEVEL``: default log level for the CLI.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from shopcart.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from shopcart.infrastructure.persistence.json_coupon_repository import (
    JsonCouponRepository,
)
from shopcart.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)

load_dotenv()

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def data_dir() -> Path:
    return Path(os.getenv("SHOPCART_DATA_DIR", str(_DEFAULT_DATA_DIR)))


def log_level() -> str:
    return os.getenv("SHOPCART_LOG_LEVEL", "WARNING").upper()


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(data_dir() / "products.json")


def cart_repository() -> JsonCartRepository:
    return JsonCartRepository(data_dir() / "carts.json")


def coupon_repository() -> JsonCouponRepository:
    return JsonCouponRepository(data_dir() / "coupons.json")
