"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions. The engine is built
once per process by the caller and passed in explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.engine import Engine

from orderbot.application.customer_registry import CustomerRegistry
from orderbot.application.order_service import OrderService
from orderbot.domain.service.order_pricer import OrderPricer
from orderbot.infrastructure.config import Settings
from orderbot.infrastructure.persistence.engine import create_db_engine
from orderbot.infrastructure.persistence.sql_customer_repository import (
    SqlCustomerRepository,
)
from orderbot.infrastructure.persistence.sql_order_repository import (
    SqlOrderRepository,
)
from orderbot.infrastructure.persistence.sql_product_repository import (
    SqlProductRepository,
)


def create_engine_from_settings(settings: Settings) -> Engine:
    return create_db_engine(settings.database_url, timeout=settings.db_timeout)


@dataclass(frozen=True)
class Container:
    """Everything a request handler needs, sharing one engine."""

    engine: Engine
    catalog: SqlProductRepository
    registry: CustomerRegistry
    orders: OrderService

    def close(self) -> None:
        self.engine.dispose()


def build_container(engine: Engine, settings: Settings | None = None) -> Container:
    settings = settings or Settings()
    catalog = SqlProductRepository(engine)
    registry = CustomerRegistry(
        SqlCustomerRepository(engine),
        default_name=settings.default_customer_name,
    )
    service = OrderService(
        registry=registry,
        pricer=OrderPricer(catalog),
        order_repo=SqlOrderRepository(engine),
    )
    return Container(engine=engine, catalog=catalog, registry=registry, orders=service)
