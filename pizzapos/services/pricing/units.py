"""Expansion of cart lines into individually priced units."""
from typing import Iterator, List, Optional, Sequence

from pydantic import BaseModel

from pizzapos.services.catalog.base import MenuItem, PizzaSize
from pizzapos.services.pricing.errors import InvalidArgument
from pizzapos.services.pricing.models import CartItem


class PurchasedUnit(BaseModel):
    """One unit of quantity from a cart line."""

    cart_item_id: str
    unit_price: float
    menu_item: MenuItem
    selected_size: Optional[PizzaSize] = None
    used: bool = False

    @property
    def category_id(self) -> str:
        return self.menu_item.category_id


class UnitPool:
    """
    Position-indexed arena of purchased units for one pricing computation.

    Deals mark units as used while they match; a pool must never be shared
    between two computations.
    """

    def __init__(self, units: Sequence[PurchasedUnit]):
        self._units: List[PurchasedUnit] = list(units)

    @classmethod
    def from_cart(cls, cart: Sequence[CartItem]) -> "UnitPool":
        return cls(expand_units(cart))

    def __len__(self) -> int:
        return len(self._units)

    def __iter__(self) -> Iterator[PurchasedUnit]:
        return iter(self._units)

    def __getitem__(self, index: int) -> PurchasedUnit:
        return self._units[index]

    def unused_in_category(self, category_id: str) -> List[int]:
        """Indices of unused units in a category, in pool order."""
        return [
            i
            for i, unit in enumerate(self._units)
            if not unit.used and unit.category_id == category_id
        ]

    def mark_used(self, indices: Sequence[int]) -> None:
        for i in indices:
            self._units[i].used = True

    @property
    def used_count(self) -> int:
        return sum(1 for unit in self._units if unit.used)


def expand_units(cart: Sequence[CartItem]) -> List[PurchasedUnit]:
    """
    Flatten a cart into one unit per unit of quantity, keeping line order.

    Each unit is priced at the line total divided by its quantity, so added
    toppings are part of the unit price.
    """
    units = []
    for line in cart:
        if line.quantity < 1:
            raise InvalidArgument(
                f"Cart line {line.id} ({line.menu_item.name}) has quantity {line.quantity}"
            )
        unit_price = line.total_price / line.quantity
        for _ in range(line.quantity):
            units.append(
                PurchasedUnit(
                    cart_item_id=line.id,
                    unit_price=unit_price,
                    menu_item=line.menu_item,
                    selected_size=line.selected_size,
                )
            )
    return units
