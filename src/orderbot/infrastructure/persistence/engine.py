"""Database engine setup.

SQLAlchemy Core (not ORM): the core's reads and writes are a handful of
explicit statements, and the transaction boundaries are part of its
contract, so they are spelled out with ``engine.begin()``.

One engine is built per process and handed to each repository; nothing
in this package keeps a module-level client.
"""

from __future__ import annotations

import math
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url

from orderbot.infrastructure.persistence.schema import metadata

SUPPORTED_BACKENDS = ("sqlite", "postgresql", "mysql", "mariadb")


def create_db_engine(database_url: str, *, timeout: float = 5.0, echo: bool = False) -> Engine:
    """Create an engine whose lock and pool waits are bounded by *timeout*.

    SQLite gets the timeout as its busy timeout, plus WAL mode (file
    databases only) and foreign keys. Server backends get it as the pool
    checkout timeout and, through the driver, as the connect timeout and
    the statement and lock wait limit.

    Raises:
        ValueError: If the URL names a backend outside SUPPORTED_BACKENDS.
    """
    url = make_url(database_url)
    backend = url.get_backend_name()

    if backend != "sqlite":
        return create_engine(
            url,
            echo=echo,
            pool_timeout=timeout,
            pool_pre_ping=True,
            connect_args=driver_timeout_args(backend, timeout),
        )

    engine = create_engine(url, echo=echo, connect_args={"timeout": timeout})
    in_memory = url.database in (None, "", ":memory:")

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        if not in_memory:
            cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_database(engine: Engine) -> Engine:
    """Create every table. Idempotent; safe to call on an existing store."""
    metadata.create_all(engine)
    return engine


def driver_timeout_args(backend: str, timeout: float) -> dict[str, Any]:
    """DBAPI ``connect_args`` that bound every server round trip by *timeout*."""
    seconds = max(1, math.ceil(timeout))
    millis = max(1, round(timeout * 1000))
    if backend == "postgresql":
        # libpq options, understood by psycopg2 and psycopg 3
        return {
            "connect_timeout": seconds,
            "options": f"-c statement_timeout={millis} -c lock_timeout={millis}",
        }
    if backend in ("mysql", "mariadb"):
        return {
            "connect_timeout": seconds,
            "read_timeout": seconds,
            "write_timeout": seconds,
        }
    raise ValueError(
        f"Unsupported database backend '{backend}' "
        f"(expected one of: {', '.join(SUPPORTED_BACKENDS)})"
    )
