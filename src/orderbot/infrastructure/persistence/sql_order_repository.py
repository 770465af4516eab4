"""SQL-backed implementation of OrderRepository (the order store)."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence

from sqlalchemy import Connection, Select, insert, select, update
from sqlalchemy.engine import Engine, Row

from orderbot.domain.exceptions import NotFoundError
from orderbot.domain.model.customer import CustomerSummary
from orderbot.domain.model.order import Order, OrderLine, OrderStatus
from orderbot.domain.model.value_objects import Quantity
from orderbot.domain.repository.order_repository import OrderRepository
from orderbot.infrastructure.persistence._rows import as_money, as_utc
from orderbot.infrastructure.persistence.errors import translate_errors
from orderbot.infrastructure.persistence.schema import (
    customers,
    order_lines,
    orders,
    products,
)


class SqlOrderRepository(OrderRepository):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # --- OrderRepository interface --------------------------------------------

    def create(self, order: Order) -> Order:
        """Insert the header and every line in a single transaction.

        If any line fails, the header insert is rolled back with it.
        """
        with translate_errors("create order"), self._engine.begin() as conn:
            result = conn.execute(
                insert(orders).values(
                    customer_id=order.customer_id,
                    status=order.status.value,
                    total=order.total.amount,
                    delivery_address=order.delivery_address,
                    notes=order.notes,
                    created_at=order.created_at,
                )
            )
            order_id = result.inserted_primary_key[0]
            self._insert_lines(conn, order_id, order.lines)
            return self._load(conn, order_id)

    def get_by_id(self, order_id: int) -> Order | None:
        with translate_errors("load order"), self._engine.connect() as conn:
            row = conn.execute(self._select_headers().where(orders.c.id == order_id)).first()
            if row is None:
                return None
            lines = self._load_lines(conn, [order_id])
        return self._to_domain(row, lines[order_id])

    def list(self, customer_id: int | None = None, limit: int = 50) -> list[Order]:
        query = self._select_headers()
        if customer_id is not None:
            query = query.where(orders.c.customer_id == customer_id)
        query = query.order_by(orders.c.created_at.desc(), orders.c.id.desc()).limit(limit)

        with translate_errors("list orders"), self._engine.connect() as conn:
            rows = conn.execute(query).all()
            lines = self._load_lines(conn, [row.id for row in rows])
        return [self._to_domain(row, lines[row.id]) for row in rows]

    def update_status(self, order_id: int, status: OrderStatus) -> Order:
        with translate_errors("update order status"), self._engine.begin() as conn:
            result = conn.execute(
                update(orders).where(orders.c.id == order_id).values(status=status.value)
            )
            if result.rowcount == 0:
                raise NotFoundError(f"Order #{order_id} not found")
            return self._load(conn, order_id)

    # --- Writes ---------------------------------------------------------------

    def _insert_lines(self, conn: Connection, order_id: int, lines: Sequence[OrderLine]) -> None:
        if not lines:
            return
        conn.execute(
            insert(order_lines),
            [
                {
                    "order_id": order_id,
                    "product_id": line.product_id,
                    "quantity": line.quantity.value,
                    "unit_price": line.unit_price.amount,
                    "subtotal": line.subtotal.amount,
                }
                for line in lines
            ],
        )

    # --- Reads ----------------------------------------------------------------

    def _load(self, conn: Connection, order_id: int) -> Order:
        row = conn.execute(self._select_headers().where(orders.c.id == order_id)).one()
        return self._to_domain(row, self._load_lines(conn, [order_id])[order_id])

    @staticmethod
    def _select_headers() -> Select:
        return select(
            orders,
            customers.c.name.label("customer_name"),
            customers.c.channel_id.label("customer_channel_id"),
        ).select_from(orders.join(customers, orders.c.customer_id == customers.c.id))

    @staticmethod
    def _load_lines(conn: Connection, order_ids: list[int]) -> dict[int, list[OrderLine]]:
        grouped: dict[int, list[OrderLine]] = defaultdict(list)
        if not order_ids:
            return grouped
        rows = conn.execute(
            select(order_lines, products.c.name.label("product_name"))
            .select_from(
                order_lines.outerjoin(products, order_lines.c.product_id == products.c.id)
            )
            .where(order_lines.c.order_id.in_(order_ids))
            .order_by(order_lines.c.order_id, order_lines.c.id)
        ).all()
        for row in rows:
            grouped[row.order_id].append(
                OrderLine(
                    id=row.id,
                    product_id=row.product_id,
                    product_name=row.product_name,
                    quantity=Quantity(row.quantity),
                    unit_price=as_money(row.unit_price),
                )
            )
        return grouped

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_domain(row: Row, lines: list[OrderLine]) -> Order:
        # The stored total is authoritative; it is not re-derived from lines.
        return Order(
            id=row.id,
            customer_id=row.customer_id,
            lines=lines,
            total=as_money(row.total),
            status=OrderStatus(row.status),
            delivery_address=row.delivery_address,
            notes=row.notes,
            created_at=as_utc(row.created_at),
            customer=CustomerSummary(
                id=row.customer_id,
                name=row.customer_name,
                channel_id=row.customer_channel_id,
            ),
        )
