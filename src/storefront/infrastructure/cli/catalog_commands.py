"""CLI commands for products, discounts and shipping rates."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

import click

from storefront.application.manage_discounts import DiscountService
from storefront.application.manage_shipping_rates import ShippingRateService
from storefront.domain.exceptions import DomainException, EntityNotFoundError
from storefront.domain.model.catalog import ShippingRate
from storefront.domain.model.discount import Discount, DiscountScope, DiscountType
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.cli.state import CliState


def _parse_amount(raw: str) -> Decimal:
    try:
        return Decimal(raw)
    except InvalidOperation:
        raise click.BadParameter(f"Invalid amount '{raw}'.")


# --- Products -----------------------------------------------------------------


@click.command("list")
@click.pass_obj
def product_list(state: CliState) -> None:
    """List all products in the catalog with their stock."""
    with state.uow() as uow:
        products = uow.products.list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<26} {'Name':<24} {'Status':<9} {'Price':>10} {'Stock':>6}")
    click.echo("-" * 79)
    for p in products:
        click.echo(
            f"{p.id:<26} {p.name:<24} {p.status.value:<9} {p.price.amount:>10} {p.stock:>6}"
        )
        for v in p.variants:
            click.echo(
                f"{'':<26}   {v.variant_name:<22} {'':<9} {v.price.amount:>10} {v.stock:>6}"
            )


# --- Discounts ----------------------------------------------------------------


@click.command("list")
@click.pass_obj
def discount_list(state: CliState) -> None:
    """List discount codes, newest first."""
    discounts = DiscountService(state.uow()).list_all()

    if not discounts:
        click.echo("No discounts found.")
        return

    click.echo(f"{'Code':<16} {'Type':<11} {'Value':>8} {'Status':<9}")
    click.echo("-" * 47)
    for d in discounts:
        click.echo(f"{d.code:<16} {d.type.value:<11} {d.value:>8} {d.status.value:<9}")


@click.command("add")
@click.option("--code", required=True, help="Discount code (stored uppercase).")
@click.option(
    "--type",
    "discount_type",
    required=True,
    type=click.Choice([t.value for t in DiscountType]),
    help="Percentage or fixed amount.",
)
@click.option("--value", required=True, help="Percent (0-100) or fixed amount.")
@click.option(
    "--applies-to",
    default=DiscountScope.ENTIRE.value,
    type=click.Choice([s.value for s in DiscountScope]),
    show_default=True,
)
@click.pass_obj
def discount_add(
    state: CliState, code: str, discount_type: str, value: str, applies_to: str
) -> None:
    """Create a discount code."""
    discount = Discount(
        id=None,
        code=Discount.normalize_code(code),
        type=DiscountType(discount_type),
        value=_parse_amount(value),
        applies_to=DiscountScope(applies_to),
    )

    try:
        DiscountService(state.uow()).create(discount)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Discount {discount.code} added ({discount.type.value} {discount.value})")


# --- Shipping rates -----------------------------------------------------------


@click.command("list")
@click.pass_obj
def shipping_list(state: CliState) -> None:
    """List shipping rates by city."""
    rates = ShippingRateService(state.uow()).list_all()

    if not rates:
        click.echo("No shipping rates found.")
        return

    click.echo(f"{'City':<24} {'Fee':>10}")
    click.echo("-" * 35)
    for r in rates:
        click.echo(f"{r.city:<24} {r.shipping_fee.amount:>10}")


@click.command("set")
@click.option("--city", required=True, help="City name.")
@click.option("--fee", required=True, help="Shipping fee (e.g. 45.00).")
@click.pass_obj
def shipping_set(state: CliState, city: str, fee: str) -> None:
    """Create or replace the shipping rate for a city."""
    service = ShippingRateService(state.uow())

    try:
        shipping_fee = Money(_parse_amount(fee))
        try:
            existing = service.get_by_city(city)
        except EntityNotFoundError:
            service.create(ShippingRate(id=None, city=city.strip(), shipping_fee=shipping_fee))
        else:
            service.update(existing.id, {"shipping_fee": shipping_fee})
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Shipping to {city} set to {shipping_fee}")
