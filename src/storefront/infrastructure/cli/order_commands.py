"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import OrderStatus
from storefront.infrastructure.cli.state import CliState


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer.name} <{dto.customer.email}>, {dto.customer.city}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Variant':<12} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*65}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<24} {item.variant_name or '':<12} {item.quantity:>5} "
            f"{item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*65}")
    click.echo(f"  {'Subtotal':<44} {dto.subtotal:>20}")
    click.echo(f"  {'Shipping':<44} {dto.shipping_fee:>20}")
    if dto.discount_code:
        click.echo(f"  {'Discount (' + dto.discount_code + ')':<44} {-dto.discount_amount:>20}")
    click.echo(f"  {'Order Total (' + dto.currency + ')':<44} {dto.total_amount:>20}")


@click.command("list")
@click.pass_obj
def order_list(state: CliState) -> None:
    """List orders, newest first."""
    orders = ListOrdersHandler(state.uow()).handle()

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<26} {'Customer':<20} {'Status':<11} {'Total':>10}")
    click.echo("-" * 70)
    for o in orders:
        click.echo(f"{o.id:<26} {o.customer.name:<20} {o.status:<11} {o.total_amount:>10}")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.pass_obj
def order_show(state: CliState, order_id: str) -> None:
    """Show details of an existing order."""
    try:
        dto = ShowOrderHandler(state.uow()).handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option(
    "--set",
    "new_status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus]),
    help="New status.",
)
@click.pass_obj
def order_status(state: CliState, order_id: str, new_status: str) -> None:
    """Move an order to another status."""
    try:
        UpdateOrderStatusHandler(state.uow()).handle(order_id, new_status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} is now {new_status}.")
