"""Unit tests for the Order aggregate and its business rules."""

import dataclasses

import pytest

from orderbot.domain.exceptions import ValidationError
from orderbot.domain.model.order import Order, OrderLine, OrderStatus
from orderbot.domain.model.value_objects import Money, Quantity


def _make_line(product_id: int = 1, qty: int = 1, price: str = "10.00") -> OrderLine:
    """Helper to build a valid order line."""
    return OrderLine(
        product_id=product_id,
        quantity=Quantity(qty),
        unit_price=Money.of(price),
    )


class TestOrderCreation:

    def test_happy_path(self):
        order = Order.create(customer_id=7, lines=[_make_line(qty=2, price="10.00")])
        assert order.customer_id == 7
        assert order.status == OrderStatus.PENDING
        assert order.line_count == 1
        assert order.total == Money.of("20.00")

    def test_id_is_none_for_new_orders(self):
        order = Order.create(1, [_make_line()])
        assert order.id is None  # assigned by repository

    def test_total_is_sum_of_line_subtotals(self):
        order = Order.create(1, [
            _make_line(1, qty=2, price="10.00"),
            _make_line(2, qty=3, price="5.50"),
        ])
        assert order.total == Money.of("36.50")

    def test_empty_order_has_zero_total(self):
        order = Order.create(1, [])
        assert order.is_empty
        assert order.total == Money.zero()

    def test_blank_address_and_notes_become_none(self):
        order = Order.create(1, [_make_line()], delivery_address="  ", notes="")
        assert order.delivery_address is None
        assert order.notes is None

    def test_address_is_stripped(self):
        order = Order.create(1, [_make_line()], delivery_address=" 12 Main St ")
        assert order.delivery_address == "12 Main St"

    def test_missing_customer_rejected(self):
        with pytest.raises(ValidationError, match="persisted customer"):
            Order.create(None, [_make_line()])

    def test_created_at_is_utc(self):
        order = Order.create(1, [_make_line()])
        assert order.created_at.utcoffset().total_seconds() == 0


class TestOrderTransitions:

    def test_any_status_can_follow_any_other(self):
        order = Order.create(1, [_make_line()])
        order.transition_to(OrderStatus.DELIVERED)
        order.transition_to(OrderStatus.PENDING)
        order.transition_to("cancelled")
        order.transition_to("confirmed")
        assert order.status == OrderStatus.CONFIRMED

    def test_transition_keeps_total_and_lines(self):
        order = Order.create(1, [_make_line(qty=2)])
        order.transition_to("delivered")
        assert order.total == Money.of("20.00")
        assert order.line_count == 1

    def test_unknown_status_rejected(self):
        order = Order.create(1, [_make_line()])
        with pytest.raises(ValidationError, match="Unknown order status 'shipped'"):
            order.transition_to("shipped")


class TestOrderStatus:

    def test_parse_is_case_insensitive(self):
        assert OrderStatus.parse(" Delivering ") == OrderStatus.DELIVERING

    def test_parse_passes_members_through(self):
        assert OrderStatus.parse(OrderStatus.READY) is OrderStatus.READY

    def test_terminal_states(self):
        assert OrderStatus.DELIVERED.is_terminal
        assert OrderStatus.CANCELLED.is_terminal
        assert not OrderStatus.PREPARING.is_terminal


class TestOrderLine:

    def test_subtotal_calculation(self):
        assert _make_line(qty=3, price="5.50").subtotal == Money.of("16.50")

    def test_unit_price_is_frozen(self):
        line = _make_line(price="10.00")
        with pytest.raises(dataclasses.FrozenInstanceError):
            line.unit_price = Money.of("99.00")

    def test_stored_total_is_not_recomputed(self):
        """A reconstituted order keeps the total it was stored with."""
        order = Order(
            id=1,
            customer_id=1,
            lines=[_make_line(qty=1, price="10.00")],
            total=Money.of("10.00"),
        )
        order.lines.append(_make_line(2, qty=1, price="3.00"))
        assert order.total == Money.of("10.00")
