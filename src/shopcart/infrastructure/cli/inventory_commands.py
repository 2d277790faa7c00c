"""CLI commands for inventory management."""

from __future__ import annotations

import click

from shopcart.application.set_inventory import SetInventoryHandler
from shopcart.application.show_inventory import ShowInventoryHandler
from shopcart.domain.exceptions import DomainException
from shopcart.infrastructure.bootstrap import product_repository


@click.command("set")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units in stock.")
@click.option("--size", default=None, help="Size, for products stocked per variant.")
@click.option("--color", default=None, help="Color, for products stocked per variant.")
def inventory_set(product_id: str, quantity: int, size: str | None, color: str | None) -> None:
    """Set the stock level of a product or one of its variants."""
    handler = SetInventoryHandler(product_repo=product_repository())

    try:
        handler.handle(product_id=product_id, quantity=quantity, size=size, color=color)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Inventory for #{product_id} set to {quantity}")


@click.command("show")
def inventory_show() -> None:
    """Show current inventory levels."""
    handler = ShowInventoryHandler(product_repo=product_repository())
    lines = handler.handle()

    if not lines:
        click.echo("No inventory records found.")
        return

    click.echo(f"{'ID':<6} {'Product':<20} {'Variant':<12} {'Available':>10}")
    click.echo("-" * 51)
    for line in lines:
        click.echo(
            f"{line.product_id:<6} {line.product_name:<20} {line.variant or '-':<12} {line.available:>10}"
        )
