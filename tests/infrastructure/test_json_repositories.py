"""Tests for the JSON-file-backed repositories."""

import json
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from shopcart.domain.model.cart import Cart, CartLineItem
from shopcart.domain.model.coupon import Coupon
from shopcart.domain.model.product import Product
from shopcart.domain.model.stock import ScalarStock, VariantStock
from shopcart.domain.model.value_objects import Money
from shopcart.infrastructure.persistence.json_cart_repository import JsonCartRepository
from shopcart.infrastructure.persistence.json_coupon_repository import JsonCouponRepository
from shopcart.infrastructure.persistence.json_product_repository import JsonProductRepository


class TestJsonProductRepository:

    def test_creates_missing_file(self, tmp_path):
        path = tmp_path / "nested" / "products.json"
        JsonProductRepository(path)
        assert json.loads(path.read_text()) == []

    def test_stock_shape_survives_persistence(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(Product(
            id="1", name="Shirt", price=Money.of("40.00"),
            stock=VariantStock({"M-red": 5}),
            size_options=["M"], color_options=["red"],
        ))
        repo.save(Product(id="2", name="Mug", price=Money.of("12.50"), stock=ScalarStock(10)))

        reloaded = JsonProductRepository(tmp_path / "products.json")
        assert reloaded.get_by_id("1").stock == VariantStock({"M-red": 5})
        assert reloaded.get_by_id("2").stock == ScalarStock(10)
        assert reloaded.get_by_name("SHIRT").size_options == ["M"]

    def test_save_replaces_existing(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = Product(id="2", name="Mug", price=Money.of("12.50"), stock=ScalarStock(10))
        repo.save(product)
        product.stock = product.stock.reserve(None, 4)
        repo.save(product)
        assert len(repo.list_all()) == 1
        assert repo.get_by_id("2").stock.available() == 6


class TestJsonCartRepository:

    def test_get_or_create_active_persists_once(self, tmp_path):
        repo = JsonCartRepository(tmp_path / "carts.json")
        first = repo.get_or_create_active("alice")
        second = repo.get_or_create_active("alice")
        assert first.id == second.id
        assert len(json.loads((tmp_path / "carts.json").read_text())) == 1

    def test_cart_round_trip(self, tmp_path):
        repo = JsonCartRepository(tmp_path / "carts.json")
        cart = Cart.open_for("alice")
        cart.add_item("1", 2, Decimal("40.00"), size="M", color="red")
        cart.apply_coupon("FLAT20", Decimal("20"))
        repo.save(cart)

        loaded = repo.get_active_for_user("alice")
        assert loaded.items[0].size == "M"
        assert loaded.applied_coupon.code == "FLAT20"
        assert loaded.total_amount == Decimal("60.00")
        assert loaded.total_items == 2

    def test_converted_cart_is_not_active(self, tmp_path):
        repo = JsonCartRepository(tmp_path / "carts.json")
        cart = Cart.open_for("alice")
        repo.save(cart)
        raw = json.loads((tmp_path / "carts.json").read_text())
        raw[0]["status"] = "converted"
        (tmp_path / "carts.json").write_text(json.dumps(raw))

        assert repo.get_active_for_user("alice") is None
        assert repo.get_or_create_active("alice").id != cart.id

    def test_corrupt_subtotal_is_neutralized_on_recompute(self, tmp_path):
        repo = JsonCartRepository(tmp_path / "carts.json")
        cart = Cart.open_for("alice")
        cart.items.append(CartLineItem("1", 1, Decimal("40.00"), Decimal("40.00")))
        cart.items.append(CartLineItem("2", 2, Decimal("12.50"), Decimal("25.00")))
        cart.recompute_totals()
        repo.save(cart)
        raw = json.loads((tmp_path / "carts.json").read_text())
        raw[0]["items"][0]["subtotal"] = "NaN"
        (tmp_path / "carts.json").write_text(json.dumps(raw))

        loaded = repo.get_active_for_user("alice")
        loaded.recompute_totals()
        assert loaded.total_amount == Decimal("25.00")

    def test_unreadable_subtotal_still_loads(self, tmp_path):
        repo = JsonCartRepository(tmp_path / "carts.json")
        cart = Cart.open_for("alice")
        cart.add_item("1", 1, Decimal("40.00"))
        cart.add_item("2", 2, Decimal("12.50"))
        repo.save(cart)
        raw = json.loads((tmp_path / "carts.json").read_text())
        raw[0]["items"][0]["subtotal"] = "abc"
        (tmp_path / "carts.json").write_text(json.dumps(raw))

        loaded = repo.get_active_for_user("alice")
        assert len(loaded.items) == 2
        loaded.recompute_totals()
        assert loaded.total_amount == Decimal("25.00")
        assert loaded.total_items == 3


class TestJsonCouponRepository:

    def test_round_trip(self, tmp_path):
        now = datetime(2030, 6, 1, tzinfo=timezone.utc)
        repo = JsonCouponRepository(tmp_path / "coupons.json")
        repo.save(Coupon(
            code="flat20", discount=Decimal("20"), valid_until=now + timedelta(days=1),
            max_uses=5, used_by=["bob"], min_purchase=Decimal("100"), created_at=now,
        ))

        loaded = repo.get_by_code("FLAT20")
        assert loaded.discount == Decimal("20")
        assert loaded.valid_until == now + timedelta(days=1)
        assert loaded.max_uses == 5
        assert loaded.used_by == ["bob"]
        assert loaded.min_purchase == Decimal("100")

    def test_unbounded_max_uses(self, tmp_path):
        now = datetime(2030, 6, 1, tzinfo=timezone.utc)
        repo = JsonCouponRepository(tmp_path / "coupons.json")
        repo.save(Coupon(code="ANY", discount=Decimal("5"), valid_until=now, created_at=now))
        assert repo.get_by_code("ANY").max_uses is None
        assert repo.get_by_code("NOPE") is None
