import click

from orderbot.infrastructure.cli.catalog_commands import (
    category_list,
    product_add,
    product_list,
)
from orderbot.infrastructure.cli.context import get_container
from orderbot.infrastructure.cli.customer_commands import customer_resolve
from orderbot.infrastructure.cli.order_commands import (
    order_list,
    order_place,
    order_show,
    order_status,
)
from orderbot.infrastructure.config import Settings
from orderbot.infrastructure.logging import configure_logging


@click.group()
@click.option("--database-url", default=None, help="SQLAlchemy URL of the order store.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.pass_context
def cli(
    ctx: click.Context,
    database_url: str | None,
    verbose: bool,
    log_json: bool,
) -> None:
    """orderbot: order and customer core of the shop bot."""
    settings = Settings.from_cli(
        database_url=database_url,
        verbose=verbose or None,
        log_json=log_json or None,
    )
    configure_logging(verbose=settings.verbose, log_json=settings.log_json)
    ctx.obj = settings


@cli.command("init-db")
@click.pass_context
def init_db(ctx: click.Context) -> None:
    """Create the store's tables (idempotent)."""
    get_container(ctx)
    click.echo("Database ready.")


@cli.group()
def order() -> None:
    """Place and manage orders."""


@cli.group()
def product() -> None:
    """Browse and seed the catalog."""


@cli.group()
def customer() -> None:
    """Look up customers."""


# Register subcommands
order.add_command(order_list)
order.add_command(order_place)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(category_list)
product.add_command(product_add)
product.add_command(product_list)
customer.add_command(customer_resolve)
