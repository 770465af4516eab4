"""Domain service: Order Pricer.

Turns a customer's requested (product, quantity) pairs into priced order
lines using the catalog as it is at this instant. The price read here is
copied into each line; nothing re-reads the catalog afterwards.

Requests whose product is missing from the catalog are dropped rather
than failing the whole order. Each drop is logged as a warning and
reported in ``PricedOrder.dropped`` so callers can tell a partial
result apart from a clean one.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

import structlog

from orderbot.domain.exceptions import ValidationError
from orderbot.domain.model.order import OrderLine
from orderbot.domain.model.value_objects import Money, Quantity
from orderbot.domain.repository.product_repository import ProductRepository

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ItemRequest:
    """Input: what the customer asked for (product id + quantity)."""

    product_id: int
    quantity: int


@dataclass(frozen=True)
class PricedOrder:
    lines: list[OrderLine]
    total: Money
    dropped: list[int] = field(default_factory=list)

    @property
    def is_partial(self) -> bool:
        return bool(self.dropped)


class OrderPricer:

    def __init__(self, catalog: ProductRepository) -> None:
        self._catalog = catalog

    def price(self, items: Iterable[ItemRequest]) -> PricedOrder:
        """Price every request against the current catalog.

        Two phases:
          Phase 1, validate: every quantity must be a positive integer.
                    A bad quantity rejects the request before any lookup.
          Phase 2, resolve: look each product up and snapshot its price.
        """
        # Phase 1: validate quantities
        requested: list[tuple[int, Quantity]] = []
        for item in items:
            try:
                qty = Quantity(item.quantity)
            except ValidationError as exc:
                raise ValidationError(
                    f"Invalid quantity {item.quantity!r} for product {item.product_id}: {exc}"
                ) from exc
            requested.append((item.product_id, qty))

        # Phase 2: resolve against the catalog
        lines: list[OrderLine] = []
        dropped: list[int] = []
        for product_id, qty in requested:
            product = self._catalog.get_by_id(product_id)
            if product is None:
                log.warning("pricing.item_dropped", product_id=product_id, quantity=qty.value)
                dropped.append(product_id)
                continue
            lines.append(
                OrderLine(
                    product_id=product.id,
                    quantity=qty,
                    unit_price=product.price,  # <-- price snapshot
                    product_name=product.name,
                )
            )

        return PricedOrder(
            lines=lines,
            total=Money.sum(line.subtotal for line in lines),
            dropped=dropped,
        )
