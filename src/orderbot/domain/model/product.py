"""Catalog entities.

Products and categories are owned by the catalog, not by this core. The
core only reads them; a product's price is copied into an order line at
pricing time and never referenced live afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass

from orderbot.domain.model.value_objects import Money


@dataclass(frozen=True)
class Category:
    id: int
    name: str


@dataclass
class Product:
    """A product in the catalog, as seen at the instant it was read."""

    id: int
    name: str
    price: Money
    available: bool = True
    category_id: int | None = None
    category_name: str | None = None
