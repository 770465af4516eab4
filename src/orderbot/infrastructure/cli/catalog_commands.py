"""CLI commands for the (read-mostly) catalog."""

from __future__ import annotations

import click

from orderbot.domain.exceptions import DomainException
from orderbot.domain.model.value_objects import Money
from orderbot.infrastructure.cli.context import get_container


@click.command("list")
@click.option("--category", "category_id", type=int, default=None, help="Category ID filter.")
@click.pass_context
def product_list(ctx: click.Context, category_id: int | None) -> None:
    """List available products."""
    catalog = get_container(ctx).catalog

    try:
        products = catalog.list_available(category_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"  {'ID':>5} {'Name':<20} {'Price':>10}  Category")
    click.echo(f"  {'-'*50}")
    for p in products:
        click.echo(f"  {p.id:>5} {p.name:<20} {str(p.price):>10}  {p.category_name or '-'}")


@click.command("categories")
@click.pass_context
def category_list(ctx: click.Context) -> None:
    """List catalog categories."""
    catalog = get_container(ctx).catalog

    try:
        categories = catalog.list_categories()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    for c in categories:
        click.echo(f"  {c.id:>5} {c.name}")


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Unit price, e.g. 10.00")
@click.option("--category-name", default=None, help="Category (created if missing).")
@click.option("--unavailable", is_flag=True, default=False, help="Add as not available.")
@click.pass_context
def product_add(
    ctx: click.Context,
    name: str,
    price: str,
    category_name: str | None,
    unavailable: bool,
) -> None:
    """Add a product to the local catalog."""
    catalog = get_container(ctx).catalog

    try:
        category_id = catalog.add_category(category_name).id if category_name else None
        product = catalog.add_product(
            name,
            Money.of(price),
            available=not unavailable,
            category_id=category_id,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} added: {product.name} at {product.price}")
