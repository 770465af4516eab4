"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry formatted order data to whatever renders it (the CLI today,
a messaging adapter tomorrow) without exposing domain internals.
"""

from __future__ import annotations

from dataclasses import dataclass

from orderbot.domain.model.order import Order


@dataclass(frozen=True)
class OrderLineDTO:
    """Output: a single order line as displayed to the user."""

    product_id: int
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$10.00"
    subtotal: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    customer_id: int
    customer_name: str | None
    channel_id: str | None
    status: str
    lines: list[OrderLineDTO]
    total: str
    delivery_address: str | None
    notes: str | None
    created_at: str


def order_to_dto(order: Order) -> OrderDTO:
    customer = order.customer
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        customer_id=order.customer_id,
        customer_name=customer.name if customer else None,
        channel_id=customer.channel_id if customer else None,
        status=order.status.value,
        lines=[
            OrderLineDTO(
                product_id=line.product_id,
                product_name=line.product_name or f"#{line.product_id}",
                quantity=line.quantity.value,
                unit_price=str(line.unit_price),
                subtotal=str(line.subtotal),
            )
            for line in order.lines
        ],
        total=str(order.total),
        delivery_address=order.delivery_address,
        notes=order.notes,
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )
