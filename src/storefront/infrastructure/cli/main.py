import click

from storefront.infrastructure.cli.catalog_commands import (
    discount_add,
    discount_list,
    product_list,
    shipping_list,
    shipping_set,
)
from storefront.infrastructure.cli.order_commands import order_list, order_show, order_status
from storefront.infrastructure.cli.state import CliState
from storefront.infrastructure.config import Settings
from storefront.infrastructure.logging_config import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Storefront backend administration."""
    if ctx.obj is None:
        ctx.obj = CliState(settings=Settings())
    configure_logging(ctx.obj.settings.log_level)


@cli.command()
@click.option("--host", default=None, help="Bind address (default from settings).")
@click.option("--port", default=None, type=int, help="Port (default from settings).")
@click.pass_obj
def serve(state: CliState, host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    import uvicorn

    from storefront.infrastructure.http.app import create_app

    settings = state.settings
    app = create_app(settings, state.uow_factory)
    uvicorn.run(
        app,
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Browse products."""


@cli.group()
def discount() -> None:
    """Manage discount codes."""


@cli.group()
def shipping() -> None:
    """Manage shipping rates."""


# Register subcommands
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_list)
discount.add_command(discount_add)
discount.add_command(discount_list)
shipping.add_command(shipping_list)
shipping.add_command(shipping_set)
