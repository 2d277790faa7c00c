"""Compensating journal for inventory movements made by a cart operation.

A cart operation moves stock first and writes the cart second, and the
two writes go to different records with no transaction around them.
``InventoryJournal`` remembers every movement it performs; if anything
inside ``compensating()`` fails afterwards (typically the cart write),
the movements are undone in reverse order before the error propagates.

A movement that cannot be undone is logged and skipped so that the
original error is the one the caller sees.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum

from shopcart.domain.service.inventory_store import InventoryStore

logger = logging.getLogger(__name__)


class Movement(Enum):
    RESERVE = "reserve"
    RELEASE = "release"


@dataclass(frozen=True)
class JournalEntry:
    movement: Movement
    product_id: str
    variant_key: str | None
    amount: int


class InventoryJournal:

    def __init__(self, inventory: InventoryStore) -> None:
        self._inventory = inventory
        self._entries: list[JournalEntry] = []

    @property
    def entries(self) -> list[JournalEntry]:
        return list(self._entries)

    def reserve(self, product_id: str, variant_key: str | None, amount: int) -> None:
        self._inventory.reserve(product_id, variant_key, amount)
        self._entries.append(
            JournalEntry(Movement.RESERVE, product_id, variant_key, amount)
        )

    def release(self, product_id: str, variant_key: str | None, amount: int) -> None:
        self._inventory.release(product_id, variant_key, amount)
        self._entries.append(
            JournalEntry(Movement.RELEASE, product_id, variant_key, amount)
        )

    @contextmanager
    def compensating(self, operation: str) -> Iterator[None]:
        """Undo recorded movements if the ``with`` body raises."""
        try:
            yield
        except Exception:
            if self._entries:
                logger.error(
                    "%s failed after %d inventory movement(s), compensating",
                    operation, len(self._entries),
                )
                self.compensate()
            raise

    def compensate(self) -> None:
        while self._entries:
            entry = self._entries.pop()
            try:
                if entry.movement is Movement.RESERVE:
                    self._inventory.release(
                        entry.product_id, entry.variant_key, entry.amount
                    )
                else:
                    self._inventory.reserve(
                        entry.product_id, entry.variant_key, entry.amount
                    )
            except Exception:
                logger.exception(
                    "Could not undo %s of %d x %s [%s]",
                    entry.movement.value, entry.amount,
                    entry.product_id, entry.variant_key,
                )
