"""SQL-backed implementation of CustomerRepository."""

from __future__ import annotations

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Engine, Row

from orderbot.domain.exceptions import NotFoundError
from orderbot.domain.model.customer import Customer
from orderbot.domain.repository.customer_repository import CustomerRepository
from orderbot.infrastructure.persistence._rows import as_utc
from orderbot.infrastructure.persistence.errors import translate_errors
from orderbot.infrastructure.persistence.schema import customers


class SqlCustomerRepository(CustomerRepository):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # --- CustomerRepository interface -----------------------------------------

    def get_by_channel_id(self, channel_id: str) -> Customer | None:
        with translate_errors("look up customer"), self._engine.connect() as conn:
            row = conn.execute(
                select(customers).where(customers.c.channel_id == channel_id)
            ).first()
        return self._to_domain(row) if row is not None else None

    def add(self, customer: Customer) -> Customer:
        # The UNIQUE constraint on channel_id is what decides a creation race.
        with translate_errors("insert customer", unique_conflict=True), self._engine.begin() as conn:
            result = conn.execute(
                insert(customers).values(
                    channel_id=customer.channel_id,
                    name=customer.name,
                    created_at=customer.created_at,
                )
            )
            customer_id = result.inserted_primary_key[0]
        return Customer(
            id=customer_id,
            channel_id=customer.channel_id,
            name=customer.name,
            created_at=customer.created_at,
        )

    def rename(self, customer_id: int, name: str) -> Customer:
        with translate_errors("rename customer"), self._engine.begin() as conn:
            result = conn.execute(
                update(customers).where(customers.c.id == customer_id).values(name=name)
            )
            if result.rowcount == 0:
                raise NotFoundError(f"Customer #{customer_id} not found")
            row = conn.execute(select(customers).where(customers.c.id == customer_id)).one()
        return self._to_domain(row)

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_domain(row: Row) -> Customer:
        return Customer(
            id=row.id,
            channel_id=row.channel_id,
            name=row.name,
            created_at=as_utc(row.created_at),
        )
