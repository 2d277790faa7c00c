"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.

Records are deep-copied on the way in and out, the way a document store
hands back fresh objects, so a test only sees what was actually saved.
"""

from __future__ import annotations

import copy

from shopcart.domain.model.cart import Cart, CartStatus
from shopcart.domain.model.coupon import Coupon
from shopcart.domain.model.product import Product
from shopcart.domain.repository.cart_repository import CartRepository
from shopcart.domain.repository.coupon_repository import CouponRepository
from shopcart.domain.repository.product_repository import ProductRepository


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        for p in products or []:
            self._store[p.id] = copy.deepcopy(p)

    def get_by_id(self, product_id: str) -> Product | None:
        return copy.deepcopy(self._store.get(product_id))

    def get_by_name(self, name: str) -> Product | None:
        for p in self._store.values():
            if p.name.lower() == name.lower():
                return copy.deepcopy(p)
        return None

    def list_all(self) -> list[Product]:
        return [copy.deepcopy(p) for p in self._store.values()]

    def save(self, product: Product) -> None:
        self._store[product.id] = copy.deepcopy(product)


class FakeCartRepository(CartRepository):

    def __init__(self, carts: list[Cart] | None = None) -> None:
        self._store: dict[str, Cart] = {}
        self.save_count = 0
        for c in carts or []:
            self._store[c.id] = copy.deepcopy(c)

    def get_active_for_user(self, user_id: str) -> Cart | None:
        for cart in self._store.values():
            if cart.user_id == user_id and cart.status == CartStatus.ACTIVE:
                return copy.deepcopy(cart)
        return None

    def save(self, cart: Cart) -> None:
        self.save_count += 1
        self._store[cart.id] = copy.deepcopy(cart)

    def active_carts_for(self, user_id: str) -> list[Cart]:
        return [
            copy.deepcopy(c)
            for c in self._store.values()
            if c.user_id == user_id and c.status == CartStatus.ACTIVE
        ]


class FailingCartRepository(FakeCartRepository):
    """Accepts cart creation but fails every save after ``fail_after``."""

    def __init__(self, carts: list[Cart] | None = None, fail_after: int = 0) -> None:
        super().__init__(carts)
        self._fail_after = fail_after

    def save(self, cart: Cart) -> None:
        if self.save_count >= self._fail_after:
            self.save_count += 1
            raise OSError("disk full")
        super().save(cart)


class FakeCouponRepository(CouponRepository):

    def __init__(self, coupons: list[Coupon] | None = None) -> None:
        self._store: dict[str, Coupon] = {}
        for c in coupons or []:
            self._store[c.code] = copy.deepcopy(c)

    def get_by_code(self, code: str) -> Coupon | None:
        return copy.deepcopy(self._store.get(code))

    def save(self, coupon: Coupon) -> None:
        self._store[coupon.code] = copy.deepcopy(coupon)
