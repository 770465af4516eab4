"""Abstract repository for the Order aggregate (the order store)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderbot.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def create(self, order: Order) -> Order:
        """Persist a new order header and all of its lines atomically.

        Either everything is recorded or nothing is. Returns the order
        with the ids assigned by the store.
        """

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order with its lines, or None if not found."""

    @abstractmethod
    def list(self, customer_id: int | None = None, limit: int = 50) -> list[Order]:
        """Return at most *limit* orders, most recent first."""

    @abstractmethod
    def update_status(self, order_id: int, status: OrderStatus) -> Order:
        """Set an order's status and return the updated order.

        Raises NotFoundError if the order does not exist.
        """
