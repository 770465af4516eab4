"""SQLAlchemy Core table definitions for the order store.

Customers, orders and order lines belong to this core; categories and
products are the catalog's and are only read here (the CLI can seed
them for local use).
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    Table,
    Text,
)

metadata = MetaData()

MONEY = Numeric(12, 2, asdecimal=True)

customers = Table(
    "customers",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("channel_id", Text, nullable=False, unique=True),  # natural key
    Column("name", Text, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

categories = Table(
    "categories",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False, unique=True),
)

products = Table(
    "products",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("price", MONEY, nullable=False),
    Column("available", Boolean, nullable=False, default=True, server_default="1"),
    Column("category_id", Integer, ForeignKey("categories.id")),
    CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
)

orders = Table(
    "orders",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("customer_id", Integer, ForeignKey("customers.id"), nullable=False),
    Column("status", Text, nullable=False, default="pending", server_default="pending"),
    Column("total", MONEY, nullable=False),
    Column("delivery_address", Text),
    Column("notes", Text),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

order_lines = Table(
    "order_lines",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("order_id", Integer, ForeignKey("orders.id"), nullable=False),
    Column("product_id", Integer, ForeignKey("products.id"), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("unit_price", MONEY, nullable=False),  # snapshot at order time
    Column("subtotal", MONEY, nullable=False),
    CheckConstraint("quantity > 0", name="ck_order_lines_quantity_positive"),
)

# ---------------------------------------------------------------------------
# Indexes for frequently filtered columns
# ---------------------------------------------------------------------------

Index("ix_orders_customer_created", orders.c.customer_id, orders.c.created_at)
Index("ix_orders_created", orders.c.created_at)
Index("ix_order_lines_order", order_lines.c.order_id)
Index("ix_products_category", products.c.category_id)
