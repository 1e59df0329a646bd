"""Sales reporting over submitted orders."""
from collections import Counter
from typing import List, Sequence

from pydantic import BaseModel

from pizzapos.db.models import Order
from pizzapos.services.pricing.totals import money


class ItemSales(BaseModel):
    name: str
    quantity: int


class SalesSummary(BaseModel):
    """Totals for a set of orders, rounded for display."""

    order_count: int = 0
    gross_sales: float = 0.0
    discounts: float = 0.0
    net_sales: float = 0.0
    average_order_value: float = 0.0
    top_items: List[ItemSales] = []


def top_items(orders: Sequence[Order], limit: int = 5) -> List[ItemSales]:
    """Best sellers by quantity."""
    counts = Counter()
    for order in orders:
        for line in order.lines:
            counts[line.name] += line.quantity
    return [
        ItemSales(name=name, quantity=quantity)
        for name, quantity in counts.most_common(limit)
    ]


def summarize_sales(orders: Sequence[Order], top_limit: int = 5) -> SalesSummary:
    """Summarize orders: counts, gross, discounts, net and best sellers."""
    if not orders:
        return SalesSummary()

    gross = sum(order.subtotal for order in orders)
    discounts = sum(order.discount for order in orders)
    net = sum(order.total for order in orders)
    return SalesSummary(
        order_count=len(orders),
        gross_sales=money(gross),
        discounts=money(discounts),
        net_sales=money(net),
        average_order_value=money(net / len(orders)),
        top_items=top_items(orders, limit=top_limit),
    )
