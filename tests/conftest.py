"""Shared pytest fixtures for orderbot tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from orderbot.domain.model.product import Product
from orderbot.domain.model.value_objects import Money
from orderbot.infrastructure.bootstrap import Container, build_container
from orderbot.infrastructure.config import Settings
from orderbot.infrastructure.persistence.engine import create_db_engine, init_database
from orderbot.infrastructure.persistence.sql_product_repository import SqlProductRepository


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo handler changes made by configure_logging (the CLI calls it)."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    app = logging.getLogger("orderbot")
    app_level = app.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    app.setLevel(app_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'orderbot.db'}"


@pytest.fixture
def db_engine(db_url: str) -> Generator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(create_db_engine(db_url))
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def catalog(db_engine: Engine) -> SqlProductRepository:
    return SqlProductRepository(db_engine)


@pytest.fixture
def seeded_products(catalog: SqlProductRepository) -> list[Product]:
    """Product 1 at $10.00 and product 2 at $5.50, both in 'Food'."""
    food = catalog.add_category("Food")
    return [
        catalog.add_product("Burger", Money.of("10.00"), category_id=food.id),
        catalog.add_product("Fries", Money.of("5.50"), category_id=food.id),
    ]


@pytest.fixture
def container(db_engine: Engine, db_url: str) -> Container:
    return build_container(db_engine, Settings(database_url=db_url))
