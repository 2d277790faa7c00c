"""CLI commands for coupons."""

from __future__ import annotations

import click

from shopcart.application.apply_coupon import ApplyCouponHandler
from shopcart.application.generate_coupon import GenerateCouponHandler
from shopcart.application.remove_coupon import RemoveCouponHandler
from shopcart.domain.exceptions import DomainException
from shopcart.infrastructure.bootstrap import cart_repository, coupon_repository
from shopcart.infrastructure.cli.cart_commands import display_cart, user_option


@click.command("generate")
@click.option("--valid-days", default=30, show_default=True, type=int, help="Days until expiry.")
@click.option("--max-uses", default=None, type=int, help="Redemption limit (default: unlimited).")
@click.option("--min-purchase", default="0", show_default=True, help="Minimum cart subtotal.")
def coupon_generate(valid_days: int, max_uses: int | None, min_purchase: str) -> None:
    """Generate a random coupon (admin)."""
    handler = GenerateCouponHandler(coupon_repo=coupon_repository())

    try:
        coupon = handler.handle(valid_days, max_uses, min_purchase)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Coupon {coupon.code} generated: ${coupon.discount} off")
    click.echo(f"Valid until: {coupon.valid_until.strftime('%Y-%m-%d %H:%M UTC')}")
    click.echo(f"Max uses:    {coupon.max_uses if coupon.max_uses else 'unlimited'}")
    click.echo(f"Min order:   ${coupon.min_purchase}")


@click.command("apply")
@user_option
@click.option("--code", required=True, help="Coupon code.")
def coupon_apply(user_id: str, code: str) -> None:
    """Apply a coupon to the user's cart."""
    handler = ApplyCouponHandler(
        cart_repo=cart_repository(),
        coupon_repo=coupon_repository(),
    )

    try:
        dto = handler.handle(user_id, code)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_cart(dto)


@click.command("remove")
@user_option
def coupon_remove(user_id: str) -> None:
    """Remove the coupon from the user's cart."""
    handler = RemoveCouponHandler(cart_repo=cart_repository())

    try:
        dto = handler.handle(user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_cart(dto)
