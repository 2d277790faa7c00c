"""Integration tests for the catalog and inventory use cases."""

import pytest

from shopcart.application.add_product import AddProductHandler
from shopcart.application.add_to_cart import AddToCartHandler
from shopcart.application.set_inventory import SetInventoryHandler
from shopcart.application.show_cart import ShowCartHandler
from shopcart.application.show_inventory import ShowInventoryHandler
from shopcart.application.update_product import UpdateProductHandler
from shopcart.domain.exceptions import (
    InvalidVariantError,
    ProductNotFoundError,
    ValidationError,
)
from shopcart.domain.model.stock import ScalarStock, VariantStock
from shopcart.domain.service.locking import KeyedLock
from tests.catalog import setup_repos
from tests.fakes import FakeCartRepository, FakeProductRepository


class TestAddProduct:

    def test_options_choose_variant_stock(self):
        repo = FakeProductRepository()
        product = AddProductHandler(repo).handle("Hoodie", "55.00", ["S", "M"], ["black"])
        saved = repo.get_by_id(product.id)
        assert isinstance(saved.stock, VariantStock)
        assert saved.total_stock == 0

    def test_no_options_choose_scalar_stock(self):
        repo = FakeProductRepository()
        product = AddProductHandler(repo).handle("Sticker", "2.00")
        assert repo.get_by_id(product.id).stock == ScalarStock(0)

    def test_sequential_ids(self):
        repo = FakeProductRepository()
        handler = AddProductHandler(repo)
        assert handler.handle("A", "1").id == "1"
        assert handler.handle("B", "1").id == "2"

    def test_duplicate_name_rejected(self):
        repo = FakeProductRepository()
        handler = AddProductHandler(repo)
        handler.handle("Hoodie", "55.00")
        with pytest.raises(ValidationError, match="already exists"):
            handler.handle("hoodie", "10.00")

    def test_unknown_size_rejected(self):
        with pytest.raises(ValidationError, match="not a valid size"):
            AddProductHandler(FakeProductRepository()).handle("Hoodie", "5", ["XXS"])

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            AddProductHandler(FakeProductRepository()).handle("Hoodie", "0")


class TestSetAndShowInventory:

    def test_set_variant_count(self):
        _, product_repo = setup_repos()
        SetInventoryHandler(product_repo, locks=KeyedLock()).handle("1", 9, size="L", color="red")
        assert product_repo.get_by_id("1").stock.available("L-red") == 9

    def test_set_scalar_count(self):
        _, product_repo = setup_repos()
        SetInventoryHandler(product_repo, locks=KeyedLock()).handle("2", 0)
        assert product_repo.get_by_id("2").stock.available() == 0

    def test_variant_product_needs_variant(self):
        _, product_repo = setup_repos()
        with pytest.raises(ValidationError, match="per variant"):
            SetInventoryHandler(product_repo, locks=KeyedLock()).handle("1", 3)

    def test_variant_must_be_offered(self):
        _, product_repo = setup_repos()
        with pytest.raises(InvalidVariantError):
            SetInventoryHandler(product_repo, locks=KeyedLock()).handle("1", 3, size="XL", color="red")

    def test_missing_product_rejected(self):
        _, product_repo = setup_repos()
        with pytest.raises(ProductNotFoundError):
            SetInventoryHandler(product_repo, locks=KeyedLock()).handle("99", 3)

    def test_show_lists_each_variant(self):
        _, product_repo = setup_repos()
        lines = ShowInventoryHandler(product_repo).handle()
        assert [(line.product_id, line.variant, line.available) for line in lines] == [
            ("1", "L-blue", 2),
            ("1", "M-red", 5),
            ("2", "", 10),
            ("3", "", 5),
        ]


class TestPriceSnapshot:

    def test_price_change_does_not_touch_cart_lines(self):
        cart_repo, product_repo = setup_repos()
        add = AddToCartHandler(cart_repo, product_repo, locks=KeyedLock())
        add.handle("alice", "2", 2)

        UpdateProductHandler(product_repo, locks=KeyedLock()).handle("2", "99.00")

        dto = ShowCartHandler(cart_repo).handle("alice")
        assert dto.total_amount == "$25.00"
        assert dto.items[0].unit_price == "$12.50"

    def test_update_missing_product_rejected(self):
        _, product_repo = setup_repos()
        with pytest.raises(ProductNotFoundError):
            UpdateProductHandler(product_repo, locks=KeyedLock()).handle("99", "5")


class TestShowCart:

    def test_opens_cart_lazily_once(self):
        cart_repo = FakeCartRepository()
        handler = ShowCartHandler(cart_repo)

        first = handler.handle("alice")
        second = handler.handle("alice")

        assert first.id == second.id
        assert first.items == []
        assert cart_repo.save_count == 1
