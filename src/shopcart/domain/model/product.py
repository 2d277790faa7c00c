"""Product aggregate.

Products live independently of carts. They own the stock that carts
reserve from, and the size/color options that decide how that stock is
keyed.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from shopcart.domain.exceptions import InvalidVariantError, ValidationError
from shopcart.domain.model.stock import Stock
from shopcart.domain.model.value_objects import Money

SIZE_OPTIONS = ("XS", "S", "M", "L", "XL", "XXL", "XXXL")
COLOR_OPTIONS = (
    "red",
    "blue",
    "green",
    "black",
    "white",
    "yellow",
    "pink",
    "purple",
    "gray",
    "brown",
    "orange",
)


@dataclass
class Product:
    """A product in the catalog.

    ``stock`` is replaced wholesale on every movement; the stock value
    object itself is immutable.
    """

    id: str
    name: str
    price: Money
    stock: Stock
    size_options: list[str] = field(default_factory=list)
    color_options: list[str] = field(default_factory=list)

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        product_id: str,
        name: str,
        price: Money,
        size_options: list[str] | None = None,
        color_options: list[str] | None = None,
    ) -> Product:
        """Create a new product with empty stock of the right shape."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        sizes = list(size_options or [])
        colors = list(color_options or [])
        for size in sizes:
            if size not in SIZE_OPTIONS:
                raise ValidationError(f"{size} is not a valid size")
        for color in colors:
            if color not in COLOR_OPTIONS:
                raise ValidationError(f"{color} is not a valid color")
        return Product(
            id=product_id,
            name=name.strip(),
            price=price,
            stock=Stock.empty_for(sizes, colors),
            size_options=sizes,
            color_options=colors,
        )

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        Does NOT affect lines already in carts; they keep the price they
        captured when added.
        """
        if not new_price.is_positive:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    # --- Queries --------------------------------------------------------------

    def offers_size(self, size: str) -> bool:
        return size in self.size_options

    def offers_color(self, color: str) -> bool:
        return color in self.color_options

    @property
    def total_stock(self) -> int:
        return self.stock.total

    def validate_variant(self, size: str | None, color: str | None) -> None:
        """Reject a size or color this product is not offered in."""
        if size and not self.offers_size(size):
            raise InvalidVariantError(f"Invalid size: {size}")
        if color and not self.offers_color(color):
            raise InvalidVariantError(f"Invalid color: {color}")
