"""Stock value objects — how many units of a product are on hand.

A product's stock is one of two shapes, fixed when the product is created:

- ``ScalarStock``: a single count, for products without size/color options.
- ``VariantStock``: a count per ``"<size>-<color>"`` key.

Both share one ``reserve`` / ``release`` implementation on the ``Stock``
base class; the subclasses only say how a key maps onto a stored count.
Stock values are immutable: every movement returns a new instance.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Mapping

from shopcart.domain.exceptions import InsufficientStockError, ValidationError
from shopcart.domain.model.value_objects import require_quantity


def variant_key(size: str | None, color: str | None) -> str:
    """Build the key under which a size/color combination is stocked."""
    return f"{size or ''}-{color or ''}"


class Stock(ABC):
    """Base class for both stock representations.

    Invariant: no stored count is ever negative.
    """

    @abstractmethod
    def available(self, key: str | None = None) -> int:
        """Units on hand for *key*; scalar stock ignores the key."""

    @property
    @abstractmethod
    def total(self) -> int:
        """Units on hand across every variant."""

    @abstractmethod
    def _with_count(self, key: str | None, count: int) -> Stock:
        """Return a copy with the count stored under *key* replaced."""

    def reserve(self, key: str | None, amount: int) -> Stock:
        """Take *amount* units out of stock.

        Raises InsufficientStockError if fewer than *amount* are available.
        """
        amount = require_quantity(amount)
        current = self.available(key)
        if current < amount:
            raise InsufficientStockError(
                f"Insufficient stock{self._describe(key)}: {current} available",
                available=current,
            )
        return self._with_count(key, current - amount)

    def release(self, key: str | None, amount: int) -> Stock:
        """Put *amount* units back into stock."""
        amount = require_quantity(amount)
        return self._with_count(key, self.available(key) + amount)

    def set(self, key: str | None, count: int) -> Stock:
        """Overwrite a stored count (operator correction, not a cart movement)."""
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ValidationError("Stock count must be a non-negative integer")
        return self._with_count(key, count)

    def _describe(self, key: str | None) -> str:
        return ""

    @abstractmethod
    def to_raw(self) -> int | dict[str, int]:
        """Stored form: an int or a plain dict."""

    @staticmethod
    def from_raw(raw: int | Mapping[str, int]) -> Stock:
        """Rebuild a stock value from its stored form (int or mapping)."""
        if isinstance(raw, Mapping):
            return VariantStock(dict(raw))
        return ScalarStock(raw)

    @staticmethod
    def empty_for(size_options: list[str], color_options: list[str]) -> Stock:
        """Pick the representation a new product gets from its option lists."""
        if size_options or color_options:
            return VariantStock({})
        return ScalarStock(0)


@dataclass(frozen=True)
class ScalarStock(Stock):
    """One count for the whole product; variant keys are ignored."""

    count: int

    def __post_init__(self) -> None:
        if isinstance(self.count, bool) or not isinstance(self.count, int):
            raise ValidationError("Stock count must be an integer")
        if self.count < 0:
            raise ValidationError(f"Stock count cannot be negative, got {self.count}")

    def available(self, key: str | None = None) -> int:
        return self.count

    @property
    def total(self) -> int:
        return self.count

    def _with_count(self, key: str | None, count: int) -> Stock:
        return ScalarStock(count)

    def to_raw(self) -> int:
        return self.count


@dataclass(frozen=True)
class VariantStock(Stock):
    """A count per variant key; an absent key means zero units."""

    counts: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for key, count in self.counts.items():
            if isinstance(count, bool) or not isinstance(count, int) or count < 0:
                raise ValidationError(
                    f"Stock for {key!r} must be a non-negative integer, got {count!r}"
                )
        object.__setattr__(self, "counts", dict(self.counts))

    def available(self, key: str | None = None) -> int:
        if key is None:
            return 0
        return self.counts.get(key, 0)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def _with_count(self, key: str | None, count: int) -> Stock:
        if key is None:
            raise ValidationError("A variant key is required for this product")
        updated = dict(self.counts)
        updated[key] = count
        return VariantStock(updated)

    def _describe(self, key: str | None) -> str:
        if key is None:
            return ""
        size, _, color = key.partition("-")
        return f" for {size} {color}"

    def to_raw(self) -> dict[str, int]:
        return dict(self.counts)

