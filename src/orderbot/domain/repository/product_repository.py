"""Abstract catalog reader.

Defined in the domain layer so the domain never depends on
infrastructure. The core only ever reads the catalog.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderbot.domain.model.product import Category, Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_available(self, category_id: int | None = None) -> list[Product]:
        """Return available products ordered by name, optionally by category."""

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """Return every category ordered by ID."""
