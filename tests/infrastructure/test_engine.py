"""Tests for database engine setup and initialization."""

from pathlib import Path

import pytest
from sqlalchemy import inspect, text

from orderbot.infrastructure.persistence.engine import (
    create_db_engine,
    driver_timeout_args,
    init_database,
)


class TestCreateDbEngine:

    def test_wal_mode_enabled(self, tmp_path: Path) -> None:
        engine = create_db_engine(f"sqlite:///{tmp_path / 'test.db'}")
        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA journal_mode")).scalar() == "wal"
        engine.dispose()

    def test_foreign_keys_enabled(self, tmp_path: Path) -> None:
        engine = create_db_engine(f"sqlite:///{tmp_path / 'test.db'}")
        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
        engine.dispose()

    def test_busy_timeout_follows_setting(self, tmp_path: Path) -> None:
        engine = create_db_engine(f"sqlite:///{tmp_path / 'test.db'}", timeout=2.5)
        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA busy_timeout")).scalar() == 2500
        engine.dispose()

    def test_in_memory_database(self) -> None:
        engine = init_database(create_db_engine("sqlite://"))
        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
        engine.dispose()


class TestDriverTimeouts:

    def test_postgresql_bounds_connect_statement_and_lock_waits(self) -> None:
        args = driver_timeout_args("postgresql", 2.5)
        assert args["connect_timeout"] == 3
        assert "statement_timeout=2500" in args["options"]
        assert "lock_timeout=2500" in args["options"]

    @pytest.mark.parametrize("backend", ["mysql", "mariadb"])
    def test_mysql_bounds_connect_and_io(self, backend: str) -> None:
        assert driver_timeout_args(backend, 0.3) == {
            "connect_timeout": 1,
            "read_timeout": 1,
            "write_timeout": 1,
        }

    def test_unsupported_backend(self) -> None:
        with pytest.raises(ValueError, match="Unsupported database backend 'oracle'"):
            driver_timeout_args("oracle", 1.0)

    def test_create_engine_rejects_unsupported_backend(self) -> None:
        with pytest.raises(ValueError, match="Unsupported database backend"):
            create_db_engine("oracle://u:p@db/shop")


class TestInitDatabase:

    def test_creates_all_tables(self, tmp_path: Path) -> None:
        engine = init_database(create_db_engine(f"sqlite:///{tmp_path / 'test.db'}"))
        tables = set(inspect(engine).get_table_names())
        assert {"customers", "categories", "products", "orders", "order_lines"} <= tables
        engine.dispose()

    def test_idempotent(self, tmp_path: Path) -> None:
        engine = create_db_engine(f"sqlite:///{tmp_path / 'test.db'}")
        init_database(engine)
        init_database(engine)
        assert "orders" in inspect(engine).get_table_names()
        engine.dispose()

    def test_channel_id_is_unique(self, db_engine) -> None:
        uniques = inspect(db_engine).get_unique_constraints("customers")
        assert any(u["column_names"] == ["channel_id"] for u in uniques)
