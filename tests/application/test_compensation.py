"""Tests for undoing inventory movements when the cart write fails."""

import logging
from decimal import Decimal

import pytest

from shopcart.application.add_to_cart import AddToCartHandler
from shopcart.application.clear_cart import ClearCartHandler
from shopcart.application.compensation import InventoryJournal, Movement
from shopcart.application.remove_from_cart import RemoveFromCartHandler
from shopcart.application.update_cart_item import UpdateCartItemHandler
from shopcart.domain.exceptions import InsufficientStockError
from shopcart.domain.model.cart import Cart
from shopcart.domain.service.inventory_store import InventoryStore
from shopcart.domain.service.locking import KeyedLock
from tests.catalog import sample_products
from tests.fakes import FailingCartRepository, FakeProductRepository


def _cart_with(*lines: tuple[str, int, str, str | None, str | None]) -> Cart:
    cart = Cart.open_for("alice")
    for product_id, qty, price, size, color in lines:
        cart.add_item(product_id, qty, Decimal(price), size=size, color=color)
    return cart


def _products_after_reserving(product_id: str, key: str, amount: int) -> FakeProductRepository:
    repo = FakeProductRepository(sample_products())
    InventoryStore(repo, locks=KeyedLock()).reserve(product_id, key, amount)
    return repo


class TestAddCompensation:

    def test_failed_cart_write_releases_reservation(self, caplog):
        product_repo = FakeProductRepository(sample_products())
        cart_repo = FailingCartRepository()
        handler = AddToCartHandler(cart_repo, product_repo, locks=KeyedLock())

        with caplog.at_level(logging.ERROR):
            with pytest.raises(OSError, match="disk full"):
                handler.handle("alice", "1", 2, size="M", color="red")

        assert product_repo.get_by_id("1").stock.available("M-red") == 5
        assert "compensating" in caplog.text


class TestUpdateCompensation:

    def test_failed_grow_releases_delta(self):
        product_repo = _products_after_reserving("2", "-", 2)
        cart_repo = FailingCartRepository([_cart_with(("2", 2, "12.50", None, None))])
        handler = UpdateCartItemHandler(cart_repo, product_repo, locks=KeyedLock())

        with pytest.raises(OSError):
            handler.handle("alice", "2", 5)

        assert product_repo.get_by_id("2").stock.available() == 8
        assert cart_repo.get_active_for_user("alice").items[0].quantity == 2

    def test_failed_shrink_re_reserves_delta(self):
        product_repo = _products_after_reserving("2", "-", 6)
        cart_repo = FailingCartRepository([_cart_with(("2", 6, "12.50", None, None))])
        handler = UpdateCartItemHandler(cart_repo, product_repo, locks=KeyedLock())

        with pytest.raises(OSError):
            handler.handle("alice", "2", 1)

        assert product_repo.get_by_id("2").stock.available() == 4


class TestRemoveAndClearCompensation:

    def test_failed_remove_re_reserves(self):
        product_repo = _products_after_reserving("1", "M-red", 2)
        cart_repo = FailingCartRepository([_cart_with(("1", 2, "40.00", "M", "red"))])
        handler = RemoveFromCartHandler(cart_repo, product_repo, locks=KeyedLock())

        with pytest.raises(OSError):
            handler.handle("alice", "1", size="M", color="red")

        assert product_repo.get_by_id("1").stock.available("M-red") == 3
        assert len(cart_repo.get_active_for_user("alice").items) == 1

    def test_failed_clear_re_reserves_every_line(self):
        product_repo = FakeProductRepository(sample_products())
        store = InventoryStore(product_repo, locks=KeyedLock())
        store.reserve("1", "M-red", 2)
        store.reserve("2", "-", 3)
        cart_repo = FailingCartRepository([
            _cart_with(("1", 2, "40.00", "M", "red"), ("2", 3, "12.50", None, None))
        ])
        handler = ClearCartHandler(cart_repo, product_repo, locks=KeyedLock())

        with pytest.raises(OSError):
            handler.handle("alice")

        assert product_repo.get_by_id("1").stock.available("M-red") == 3
        assert product_repo.get_by_id("2").stock.available() == 7


class TestInventoryJournal:

    def test_records_movements_in_order(self):
        repo = FakeProductRepository(sample_products())
        journal = InventoryJournal(InventoryStore(repo, locks=KeyedLock()))

        journal.reserve("2", None, 3)
        journal.release("1", "M-red", 1)

        assert [e.movement for e in journal.entries] == [Movement.RESERVE, Movement.RELEASE]

    def test_nothing_to_undo_after_failed_reserve(self, caplog):
        repo = FakeProductRepository(sample_products())
        journal = InventoryJournal(InventoryStore(repo, locks=KeyedLock()))

        with caplog.at_level(logging.ERROR):
            with pytest.raises(InsufficientStockError):
                with journal.compensating("test"):
                    journal.reserve("2", None, 50)

        assert journal.entries == []
        assert caplog.text == ""
        assert repo.get_by_id("2").stock.available() == 10

    def test_failed_undo_does_not_mask_original_error(self, caplog):
        repo = FakeProductRepository(sample_products())
        journal = InventoryJournal(InventoryStore(repo, locks=KeyedLock()))

        with caplog.at_level(logging.ERROR):
            with pytest.raises(RuntimeError, match="boom"):
                with journal.compensating("test"):
                    journal.release("2", None, 4)
                    # Someone else takes everything before we can undo.
                    InventoryStore(repo, locks=KeyedLock()).reserve("2", None, 14)
                    raise RuntimeError("boom")

        assert "Could not undo release" in caplog.text
        assert repo.get_by_id("2").stock.available() == 0
