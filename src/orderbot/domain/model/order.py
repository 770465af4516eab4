"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its line items. Its total is
computed once, from the lines, when the order is created; afterwards the
stored total is authoritative and is never recomputed from the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from orderbot.domain.exceptions import ValidationError
from orderbot.domain.model.customer import CustomerSummary
from orderbot.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERING = "delivering"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value: str | OrderStatus) -> OrderStatus:
        """Accept an OrderStatus or its label (case-insensitive)."""
        if isinstance(value, OrderStatus):
            return value
        label = str(value).strip().lower()
        try:
            return cls(label)
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValidationError(
                f"Unknown order status '{value}' (expected one of: {allowed})"
            ) from None

    @property
    def is_terminal(self) -> bool:
        # Informational only: the store lets any status move to any other.
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


@dataclass(frozen=True)
class OrderLine:
    """Captures the price of a product at pricing time.

    Frozen: ``unit_price`` never changes once the line exists, so later
    catalog price changes cannot leak into historical orders.
    """

    product_id: int
    quantity: Quantity
    unit_price: Money  # snapshot, not a live reference
    product_name: str | None = None
    id: int | None = None

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders. The ``__init__`` is
    kept plain so the repository can reconstitute persisted orders with
    their stored total.
    """

    id: int | None
    customer_id: int
    lines: list[OrderLine]
    total: Money
    status: OrderStatus = OrderStatus.PENDING
    delivery_address: str | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    customer: CustomerSummary | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer_id: int,
        lines: list[OrderLine],
        delivery_address: str | None = None,
        notes: str | None = None,
    ) -> Order:
        """Create a new pending order whose total is the sum of its lines.

        An empty ``lines`` list is accepted and yields a zero total.
        """
        if customer_id is None:
            raise ValidationError("Order requires a persisted customer")

        return Order(
            id=None,
            customer_id=customer_id,
            lines=list(lines),
            total=Money.sum(line.subtotal for line in lines),
            delivery_address=_blank_to_none(delivery_address),
            notes=_blank_to_none(notes),
        )

    # --- State transitions ----------------------------------------------------

    def transition_to(self, status: OrderStatus | str) -> None:
        """Move to *status* unconditionally. Total and lines are untouched."""
        self.status = OrderStatus.parse(status)

    # --- Computed properties --------------------------------------------------

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()
