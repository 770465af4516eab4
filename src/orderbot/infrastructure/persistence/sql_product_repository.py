"""SQL-backed catalog reader.

The core only needs ``ProductRepository``. ``add_category`` and
``add_product`` exist so operators (and tests) can seed a local catalog.
"""

from __future__ import annotations

from sqlalchemy import Select, insert, select
from sqlalchemy.engine import Engine, Row

from orderbot.domain.exceptions import ValidationError
from orderbot.domain.model.product import Category, Product
from orderbot.domain.model.value_objects import Money
from orderbot.domain.repository.product_repository import ProductRepository
from orderbot.infrastructure.persistence._rows import as_money
from orderbot.infrastructure.persistence.errors import translate_errors
from orderbot.infrastructure.persistence.schema import categories, products


class SqlProductRepository(ProductRepository):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        with translate_errors("look up product"), self._engine.connect() as conn:
            row = conn.execute(self._select().where(products.c.id == product_id)).first()
        return self._to_domain(row) if row is not None else None

    def list_available(self, category_id: int | None = None) -> list[Product]:
        query = self._select().where(products.c.available.is_(True))
        if category_id is not None:
            query = query.where(products.c.category_id == category_id)
        query = query.order_by(products.c.name, products.c.id)

        with translate_errors("list products"), self._engine.connect() as conn:
            rows = conn.execute(query).all()
        return [self._to_domain(row) for row in rows]

    def list_categories(self) -> list[Category]:
        with translate_errors("list categories"), self._engine.connect() as conn:
            rows = conn.execute(select(categories).order_by(categories.c.id)).all()
        return [Category(id=row.id, name=row.name) for row in rows]

    # --- Seeding --------------------------------------------------------------

    def add_category(self, name: str) -> Category:
        """Return the category called *name*, creating it if needed."""
        if not name or not name.strip():
            raise ValidationError("Category name is required")
        name = name.strip()
        with translate_errors("add category"), self._engine.begin() as conn:
            row = conn.execute(select(categories).where(categories.c.name == name)).first()
            if row is not None:
                return Category(id=row.id, name=row.name)
            result = conn.execute(insert(categories).values(name=name))
            return Category(id=result.inserted_primary_key[0], name=name)

    def add_product(
        self,
        name: str,
        price: Money,
        *,
        available: bool = True,
        category_id: int | None = None,
    ) -> Product:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        with translate_errors("add product"), self._engine.begin() as conn:
            result = conn.execute(
                insert(products).values(
                    name=name.strip(),
                    price=price.amount,
                    available=available,
                    category_id=category_id,
                )
            )
            product_id = result.inserted_primary_key[0]
            row = conn.execute(self._select().where(products.c.id == product_id)).one()
        return self._to_domain(row)

    # --- Query helpers --------------------------------------------------------

    @staticmethod
    def _select() -> Select:
        return select(
            products.c.id,
            products.c.name,
            products.c.price,
            products.c.available,
            products.c.category_id,
            categories.c.name.label("category_name"),
        ).select_from(products.outerjoin(categories, products.c.category_id == categories.c.id))

    @staticmethod
    def _to_domain(row: Row) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            price=as_money(row.price),
            available=bool(row.available),
            category_id=row.category_id,
            category_name=row.category_name,
        )
