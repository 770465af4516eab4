"""CLI commands for customers."""

from __future__ import annotations

import click

from orderbot.domain.exceptions import DomainException
from orderbot.infrastructure.cli.context import get_container


@click.command("resolve")
@click.option("--channel", required=True, help="Customer channel identifier (e.g. phone).")
@click.option("--name", default=None, help="Display name to record.")
@click.pass_context
def customer_resolve(ctx: click.Context, channel: str, name: str | None) -> None:
    """Find or create the customer behind a channel identifier."""
    registry = get_container(ctx).registry

    try:
        customer = registry.resolve(channel, name)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer #{customer.id}: {customer.name} <{customer.channel_id}>")
