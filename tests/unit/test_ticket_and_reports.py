"""Unit tests for kitchen tickets and sales reporting."""
import pytest

from pizzapos.db.models import Order, OrderLine
from pizzapos.services.ordering.ticket import sort_ticket_lines
from pizzapos.services.reporting.sales import summarize_sales, top_items


def _line(name, category_id, quantity=1):
    return OrderLine(
        menu_item_id=name.lower(),
        name=name,
        category_id=category_id,
        quantity=quantity,
        total_price=0.0,
        snapshot={},
    )


def _order(subtotal, discount, lines):
    return Order(subtotal=subtotal, discount=discount, total=max(0.0, subtotal - discount), lines=lines)


class TestKitchenTicket:
    """Test ticket line ordering."""

    def test_sorted_by_category_priority(self):
        lines = [
            _line("Cola", "c3"),
            _line("Wedges", "c4"),
            _line("Margherita", "c1"),
            _line("Garlic Prawn", "c2"),
        ]
        priorities = {"c1": 1, "c2": 1, "c4": 2}

        ticket = sort_ticket_lines(lines, priorities)

        assert [line.name for line in ticket] == ["Margherita", "Garlic Prawn", "Wedges", "Cola"]

    def test_ties_keep_order_entry(self):
        lines = [_line("Wedges", "c4"), _line("Garlic Bread", "c4")]
        assert [line.name for line in sort_ticket_lines(lines, {"c4": 2})] == ["Wedges", "Garlic Bread"]

    def test_no_priorities(self):
        lines = [_line("Cola", "c3"), _line("Margherita", "c1")]
        assert [line.name for line in sort_ticket_lines(lines, {})] == ["Cola", "Margherita"]


class TestSalesSummary:
    """Test sales aggregation."""

    def test_empty(self):
        summary = summarize_sales([])

        assert summary.order_count == 0
        assert summary.net_sales == 0
        assert summary.top_items == []

    def test_totals_and_average(self):
        orders = [
            _order(40.0, 10.0, [_line("Margherita", "c1", 2)]),
            _order(20.1, 0.0, [_line("Cola", "c3")]),
        ]

        summary = summarize_sales(orders)

        assert summary.order_count == 2
        assert summary.gross_sales == pytest.approx(60.1)
        assert summary.discounts == pytest.approx(10.0)
        assert summary.net_sales == pytest.approx(50.1)
        assert summary.average_order_value == pytest.approx(25.05)

    def test_top_items_limited_to_five(self):
        names = ["A", "B", "C", "D", "E", "F"]
        orders = [
            _order(10.0, 0.0, [_line(name, "c1", quantity) for quantity, name in enumerate(names, start=1)]),
            _order(10.0, 0.0, [_line("A", "c1", 10)]),
        ]

        items = top_items(orders)

        assert len(items) == 5
        assert items[0].name == "A"
        assert items[0].quantity == 11
        assert "B" not in [item.name for item in items]
