"""CLI commands for orders."""

from __future__ import annotations

import click

from orderbot.application.dto import OrderDTO, order_to_dto
from orderbot.domain.exceptions import DomainException
from orderbot.domain.model.order import OrderStatus
from orderbot.domain.service.order_pricer import ItemRequest
from orderbot.infrastructure.cli.context import get_container, get_settings


def _parse_items(raw: str) -> list[ItemRequest]:
    """Parse '1:2,2:3' (product id : quantity) into ItemRequest list."""
    requests: list[ItemRequest] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        id_str, qty_str = pair.split(":", 1)
        try:
            product_id = int(id_str)
        except ValueError:
            raise click.BadParameter(f"Invalid product id '{id_str}'.")
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product {product_id}."
            )
        requests.append(ItemRequest(product_id=product_id, quantity=qty))
    return requests


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name} <{dto.channel_id}>")
    click.echo(f"Created:  {dto.created_at}")
    if dto.delivery_address:
        click.echo(f"Deliver:  {dto.delivery_address}")
    if dto.notes:
        click.echo(f"Notes:    {dto.notes}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_name:<20} {line.quantity:>5} {line.unit_price:>10} {line.subtotal:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("place")
@click.option("--channel", required=True, help="Customer channel identifier (e.g. phone).")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--name", default=None, help="Customer display name.")
@click.option("--address", default=None, help="Delivery address.")
@click.option("--notes", default=None, help="Free-form order notes.")
@click.pass_context
def order_place(
    ctx: click.Context,
    channel: str,
    items: str,
    name: str | None,
    address: str | None,
    notes: str | None,
) -> None:
    """Place a new order for a customer."""
    requests = _parse_items(items)
    service = get_container(ctx).orders

    try:
        order = service.place_order(
            channel,
            requests,
            display_name=name,
            delivery_address=address,
            notes=notes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if len(order.lines) < len(requests):
        click.echo(
            f"Warning: {len(requests) - len(order.lines)} item(s) not found in the catalog were skipped."
        )
    _display_order(order_to_dto(order))


@click.command("list")
@click.option("--channel", default=None, help="Only this customer's orders.")
@click.option("--limit", type=int, default=None, help="Maximum number of orders.")
@click.pass_context
def order_list(ctx: click.Context, channel: str | None, limit: int | None) -> None:
    """List the most recent orders."""
    service = get_container(ctx).orders
    limit = limit if limit is not None else get_settings(ctx).order_list_limit

    try:
        if channel:
            orders = service.list_customer_orders(channel, limit=limit)
        else:
            orders = service.list_orders(limit=limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders.")
        return

    click.echo(f"  {'ID':>5} {'Customer':<20} {'Status':<11} {'Lines':>5} {'Total':>10}  Created")
    for order in orders:
        dto = order_to_dto(order)
        click.echo(
            f"  {dto.id:>5} {dto.customer_name or '':<20} {dto.status:<11} "
            f"{len(dto.lines):>5} {dto.total:>10}  {dto.created_at}"
        )


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_context
def order_show(ctx: click.Context, order_id: int) -> None:
    """Show details of an existing order."""
    service = get_container(ctx).orders

    try:
        order = service.get_order(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(order_to_dto(order))


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option(
    "--status",
    "status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
    help="New status.",
)
@click.pass_context
def order_status(ctx: click.Context, order_id: int, status: str) -> None:
    """Move an order to a new status."""
    service = get_container(ctx).orders

    try:
        order = service.update_status(order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order.id} is now {order.status.value}.")
