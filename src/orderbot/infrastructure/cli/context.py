"""Per-invocation wiring shared by the CLI commands."""

from __future__ import annotations

import click

from orderbot.infrastructure.bootstrap import (
    Container,
    build_container,
    create_engine_from_settings,
)
from orderbot.infrastructure.config import Settings
from orderbot.infrastructure.persistence.engine import init_database


def get_settings(ctx: click.Context) -> Settings:
    return ctx.find_root().obj


def get_container(ctx: click.Context) -> Container:
    """Build (once per invocation) the container for the configured store."""
    root = ctx.find_root()
    container = root.meta.get("orderbot.container")
    if container is None:
        settings = get_settings(ctx)
        engine = init_database(create_engine_from_settings(settings))
        container = build_container(engine, settings)
        root.meta["orderbot.container"] = container
        root.call_on_close(container.close)
    return container
