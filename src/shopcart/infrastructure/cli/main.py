import logging

import click

from shopcart.infrastructure.bootstrap import log_level
from shopcart.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from shopcart.infrastructure.cli.coupon_commands import (
    coupon_apply,
    coupon_generate,
    coupon_remove,
)
from shopcart.infrastructure.cli.inventory_commands import inventory_set, inventory_show
from shopcart.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_update,
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug output.")
def cli(verbose: bool) -> None:
    """shopcart — carts, coupons and stock"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def cart() -> None:
    """Manage a user's cart."""


@cli.group()
def coupon() -> None:
    """Manage coupons."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def inventory() -> None:
    """Manage inventory."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
coupon.add_command(coupon_apply)
coupon.add_command(coupon_generate)
coupon.add_command(coupon_remove)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
inventory.add_command(inventory_set)
inventory.add_command(inventory_show)
