"""Tests for the orderbot CLI."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from orderbot.infrastructure.cli.main import cli


@pytest.fixture
def invoke(cli_runner: CliRunner, db_url: str):
    def _invoke(*args: str):
        return cli_runner.invoke(cli, ["--database-url", db_url, *args])

    return _invoke


@pytest.fixture
def seeded(invoke) -> None:
    assert invoke("product", "add", "--name", "Burger", "--price", "10.00", "--category-name", "Food").exit_code == 0
    assert invoke("product", "add", "--name", "Fries", "--price", "5.50", "--category-name", "Food").exit_code == 0


class TestInitDb:

    def test_init_db(self, invoke) -> None:
        result = invoke("init-db")
        assert result.exit_code == 0
        assert "Database ready." in result.output


class TestProductCommands:

    def test_add_and_list(self, invoke, seeded) -> None:
        result = invoke("product", "list")
        assert result.exit_code == 0
        assert "Burger" in result.output
        assert "$5.50" in result.output
        assert "Food" in result.output

    def test_categories(self, invoke, seeded) -> None:
        result = invoke("product", "categories")
        assert result.exit_code == 0
        assert "Food" in result.output

    def test_bad_price(self, invoke) -> None:
        result = invoke("product", "add", "--name", "Bad", "--price", "-1")
        assert result.exit_code != 0
        assert "cannot be negative" in result.output

    def test_empty_catalog(self, invoke) -> None:
        result = invoke("product", "list")
        assert "No products found." in result.output


class TestCustomerCommands:

    def test_resolve_then_rename(self, invoke) -> None:
        first = invoke("customer", "resolve", "--channel", "5551234")
        assert first.exit_code == 0
        assert "Customer #1: Customer <5551234>" in first.output

        second = invoke("customer", "resolve", "--channel", "5551234", "--name", "Ana")
        assert "Customer #1: Ana <5551234>" in second.output

    def test_blank_channel(self, invoke) -> None:
        result = invoke("customer", "resolve", "--channel", " ")
        assert result.exit_code != 0
        assert "Channel identifier is required" in result.output


class TestOrderCommands:

    def test_place_order(self, invoke, seeded) -> None:
        result = invoke("order", "place", "--channel", "5551234", "--items", "1:2,2:3", "--name", "Ana")
        assert result.exit_code == 0, result.output
        assert "Order #1  (status=pending)" in result.output
        assert "Customer: Ana <5551234>" in result.output
        assert "$36.50" in result.output

    def test_place_order_with_missing_product(self, invoke, seeded) -> None:
        result = invoke("order", "place", "--channel", "5551234", "--items", "99:1,1:1")
        assert result.exit_code == 0, result.output
        assert "1 item(s) not found in the catalog were skipped" in result.output
        assert "$10.00" in result.output

    def test_bad_items_format(self, invoke) -> None:
        result = invoke("order", "place", "--channel", "5551234", "--items", "burger")
        assert result.exit_code != 0
        assert "Expected 'ProductId:Quantity'" in result.output

    def test_zero_quantity(self, invoke, seeded) -> None:
        result = invoke("order", "place", "--channel", "5551234", "--items", "1:0")
        assert result.exit_code != 0
        assert "Invalid quantity" in result.output

    def test_list_and_show(self, invoke, seeded) -> None:
        invoke("order", "place", "--channel", "111", "--items", "1:1", "--name", "Ana")
        invoke("order", "place", "--channel", "222", "--items", "2:2", "--name", "Bea")

        listed = invoke("order", "list")
        assert listed.exit_code == 0
        assert listed.output.index("Bea") < listed.output.index("Ana")

        only_ana = invoke("order", "list", "--channel", "111")
        assert "Ana" in only_ana.output
        assert "Bea" not in only_ana.output

        shown = invoke("order", "show", "--id", "2")
        assert "Order #2" in shown.output
        assert "$11.00" in shown.output

    def test_list_unknown_channel(self, invoke) -> None:
        result = invoke("order", "list", "--channel", "404")
        assert result.exit_code != 0
        assert "not found" in result.output

    def test_list_empty(self, invoke) -> None:
        assert "No orders." in invoke("order", "list").output

    def test_status(self, invoke, seeded) -> None:
        invoke("order", "place", "--channel", "111", "--items", "1:1")
        result = invoke("order", "status", "--id", "1", "--status", "delivered")
        assert result.exit_code == 0
        assert "Order #1 is now delivered." in result.output

    def test_status_unknown_order(self, invoke) -> None:
        result = invoke("order", "status", "--id", "42", "--status", "ready")
        assert result.exit_code != 0
        assert "Order #42 not found" in result.output

    def test_status_unknown_label(self, invoke) -> None:
        result = invoke("order", "status", "--id", "1", "--status", "lost")
        assert result.exit_code != 0

    def test_show_missing(self, invoke) -> None:
        result = invoke("order", "show", "--id", "7")
        assert result.exit_code != 0
        assert "Order #7 not found" in result.output
