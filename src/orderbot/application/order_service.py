"""Application service: Order Service.

The only multi-step workflow of the core. Placing an order runs strictly
in sequence: resolve the customer, price the items, store the order.
Each step needs the previous step's output, and a failure at any step
propagates untouched, so nothing after it runs.

A customer created before a later step fails is left in place: customer
resolution is idempotent, so the retry finds it. An order header without
its lines is never left behind; the order store writes both in one
transaction.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from orderbot.application.customer_registry import CustomerRegistry
from orderbot.domain.exceptions import NotFoundError, ValidationError
from orderbot.domain.model.order import Order, OrderStatus
from orderbot.domain.repository.order_repository import OrderRepository
from orderbot.domain.service.order_pricer import ItemRequest, OrderPricer

log = structlog.get_logger(__name__)

DEFAULT_LIST_LIMIT = 50


class OrderService:

    def __init__(
        self,
        registry: CustomerRegistry,
        pricer: OrderPricer,
        order_repo: OrderRepository,
    ) -> None:
        self._registry = registry
        self._pricer = pricer
        self._order_repo = order_repo

    def place_order(
        self,
        channel_id: str,
        items: Iterable[ItemRequest],
        display_name: str | None = None,
        delivery_address: str | None = None,
        notes: str | None = None,
    ) -> Order:
        """Place a new pending order for the customer behind *channel_id*.

        Steps:
        1. Resolve (or create) the customer.
        2. Price the items against the current catalog (snapshot).
        3. Build the Order aggregate and persist header + lines atomically.
        """
        customer = self._registry.resolve(channel_id, display_name)
        priced = self._pricer.price(items)

        order = Order.create(
            customer_id=customer.id,
            lines=priced.lines,
            delivery_address=delivery_address,
            notes=notes,
        )
        if order.is_empty:
            log.warning("order.empty", customer_id=customer.id, dropped=priced.dropped)

        saved = self._order_repo.create(order)

        log.info(
            "order.placed",
            order_id=saved.id,
            customer_id=customer.id,
            lines=saved.line_count,
            total=str(saved.total),
        )
        return saved

    def list_orders(
        self,
        customer_id: int | None = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> list[Order]:
        """Most recent orders first, optionally for a single customer."""
        if limit < 1:
            raise ValidationError(f"Limit must be at least 1, got {limit}")
        return self._order_repo.list(customer_id=customer_id, limit=limit)

    def list_customer_orders(
        self,
        channel_id: str,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> list[Order]:
        customer = self._registry.find(channel_id)
        return self.list_orders(customer_id=customer.id, limit=limit)

    def get_order(self, order_id: int) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order #{order_id} not found")
        return order

    def update_status(self, order_id: int, status: OrderStatus | str) -> Order:
        """Move an order to *status*; any status may follow any other.

        Leaving a terminal status (delivered, cancelled) is allowed and
        logged as an ``order.reopened`` warning.
        """
        new_status = OrderStatus.parse(status)
        order = self.get_order(order_id)
        previous = order.status

        order.transition_to(new_status)
        saved = self._order_repo.update_status(order.id, order.status)

        if previous.is_terminal and previous is not new_status:
            log.warning(
                "order.reopened",
                order_id=order_id,
                previous=previous.value,
                status=new_status.value,
            )
        log.info(
            "order.status_changed",
            order_id=order_id,
            previous=previous.value,
            status=new_status.value,
        )
        return saved
