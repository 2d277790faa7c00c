"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the outer layers (CLI, HTTP) and the
application layer without exposing domain internals.
"""

from __future__ import annotations

from dataclasses import dataclass

from shopcart.domain.model.cart import Cart
from shopcart.domain.model.value_objects import format_amount


@dataclass(frozen=True)
class CartLineDTO:
    """Output: a single cart line as displayed to the user."""

    product_id: str
    size: str | None
    color: str | None
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    subtotal: str


@dataclass(frozen=True)
class CartDTO:
    """Output: the user's cart after an operation."""

    id: str
    user_id: str
    status: str
    items: list[CartLineDTO]
    total_items: int
    subtotal: str
    total_amount: str
    coupon_code: str | None
    coupon_discount: str | None
    last_updated: str


def cart_to_dto(cart: Cart) -> CartDTO:
    coupon = cart.applied_coupon
    return CartDTO(
        id=cart.id,
        user_id=cart.user_id,
        status=cart.status.value,
        items=[
            CartLineDTO(
                product_id=item.product_id,
                size=item.size,
                color=item.color,
                quantity=item.quantity,
                unit_price=format_amount(item.price),
                subtotal=format_amount(item.subtotal),
            )
            for item in cart.items
        ],
        total_items=cart.total_items,
        subtotal=format_amount(cart.subtotal),
        total_amount=format_amount(cart.total_amount),
        coupon_code=coupon.code if coupon else None,
        coupon_discount=format_amount(coupon.discount) if coupon else None,
        last_updated=cart.last_updated.strftime("%Y-%m-%d %H:%M UTC"),
    )
