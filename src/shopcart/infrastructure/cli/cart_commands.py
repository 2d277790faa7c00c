"""CLI commands for the Cart aggregate.

These stand in for the HTTP handlers: each command runs exactly one
cart use case for the user named by ``--user``.
"""

from __future__ import annotations

import click

from shopcart.application.add_to_cart import AddToCartHandler
from shopcart.application.clear_cart import ClearCartHandler
from shopcart.application.dto import CartDTO
from shopcart.application.remove_from_cart import RemoveFromCartHandler
from shopcart.application.show_cart import ShowCartHandler
from shopcart.application.update_cart_item import UpdateCartItemHandler
from shopcart.domain.exceptions import DomainException
from shopcart.infrastructure.bootstrap import cart_repository, product_repository

user_option = click.option("--user", "user_id", required=True, help="User ID.")
product_option = click.option("--product", "product_id", required=True, help="Product ID.")
size_option = click.option("--size", default=None, help="Size, e.g. M.")
color_option = click.option("--color", default=None, help="Color, e.g. red.")


def display_cart(dto: CartDTO) -> None:
    """Shared formatting for displaying a cart."""
    click.echo(f"Cart {dto.id}  (user={dto.user_id}, status={dto.status})")
    click.echo(f"Updated: {dto.last_updated}")
    click.echo()

    if not dto.items:
        click.echo("There are no items in your cart")
        return

    click.echo(f"  {'Product':<10} {'Variant':<12} {'Qty':>5} {'Price':>10} {'Subtotal':>10}")
    click.echo(f"  {'-'*51}")
    for item in dto.items:
        variant = f"{item.size or ''}/{item.color or ''}".strip("/")
        click.echo(
            f"  {item.product_id:<10} {variant:<12} {item.quantity:>5} "
            f"{item.unit_price:>10} {item.subtotal:>10}"
        )
    click.echo(f"  {'-'*51}")
    if dto.coupon_code:
        click.echo(f"  {'Subtotal':<29} {dto.subtotal:>20}")
        click.echo(f"  {'Coupon ' + dto.coupon_code:<29} {'-' + dto.coupon_discount:>20}")
    click.echo(f"  {'Total (' + str(dto.total_items) + ' items)':<29} {dto.total_amount:>20}")


@click.command("show")
@user_option
def cart_show(user_id: str) -> None:
    """Show the user's active cart."""
    handler = ShowCartHandler(cart_repo=cart_repository())

    try:
        dto = handler.handle(user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_cart(dto)


@click.command("add")
@user_option
@product_option
@click.option("--quantity", required=True, type=int, help="Units to add.")
@size_option
@color_option
def cart_add(
    user_id: str, product_id: str, quantity: int, size: str | None, color: str | None
) -> None:
    """Add units of a product to the cart (reserves stock)."""
    handler = AddToCartHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(user_id, product_id, quantity, size, color)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_cart(dto)


@click.command("update")
@user_option
@product_option
@click.option("--quantity", required=True, type=int, help="New quantity; 0 removes the line.")
@size_option
@color_option
def cart_update(
    user_id: str, product_id: str, quantity: int, size: str | None, color: str | None
) -> None:
    """Change the quantity of a cart line."""
    handler = UpdateCartItemHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(user_id, product_id, quantity, size, color)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_cart(dto)


@click.command("remove")
@user_option
@product_option
@size_option
@color_option
def cart_remove(
    user_id: str, product_id: str, size: str | None, color: str | None
) -> None:
    """Remove a line from the cart (returns its stock)."""
    handler = RemoveFromCartHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(user_id, product_id, size, color)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_cart(dto)


@click.command("clear")
@user_option
def cart_clear(user_id: str) -> None:
    """Empty the cart and return all stock."""
    handler = ClearCartHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
    )

    try:
        handler.handle(user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Cart cleared successfully")
