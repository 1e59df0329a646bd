"""Item price calculation."""
from typing import List, Optional, Sequence

from pizzapos.services.catalog.base import MenuItem, PizzaSize, PricingType, Topping
from pizzapos.services.pricing.errors import InvalidArgument
from pizzapos.services.pricing.models import CartItem, SubItemSelection


def compute_unit_price(
    item: MenuItem,
    size: Optional[PizzaSize] = None,
    added_toppings: Sequence[Topping] = (),
    selected_option: Optional[Topping] = None,
) -> float:
    """
    Price one unit of a configured item.

    Missing prices count as zero: a size-based item sold in a size it has no
    price for is charged only for its extras.
    """
    base_price = 0.0
    if item.pricing_type == PricingType.FIXED:
        base_price = item.price or 0.0
    elif size is not None:
        base_price = item.size_prices.get(size, 0.0)

    toppings_price = sum(t.price for t in added_toppings)
    option_price = selected_option.price if selected_option else 0.0

    return base_price + toppings_price + option_price


def _check_quantity(quantity: int) -> None:
    if quantity < 1:
        raise InvalidArgument(f"Quantity must be at least 1, got {quantity}")


def price_cart_item(
    item: MenuItem,
    quantity: int = 1,
    size: Optional[PizzaSize] = None,
    added_toppings: Optional[List[Topping]] = None,
    removed_toppings: Optional[List[str]] = None,
    selected_option: Optional[Topping] = None,
    sub_items: Optional[List[SubItemSelection]] = None,
    notes: Optional[str] = None,
) -> CartItem:
    """Build a cart line with its total price for the full quantity."""
    _check_quantity(quantity)
    added_toppings = added_toppings or []
    unit_price = compute_unit_price(item, size, added_toppings, selected_option)
    return CartItem(
        menu_item=item,
        quantity=quantity,
        selected_size=size,
        added_toppings=added_toppings,
        removed_toppings=removed_toppings or [],
        selected_option=selected_option,
        sub_items=sub_items or [],
        notes=notes,
        total_price=unit_price * quantity,
    )


def with_quantity(line: CartItem, quantity: int) -> CartItem:
    """Return a copy of the line re-priced at a new quantity."""
    _check_quantity(quantity)
    unit_price = compute_unit_price(
        line.menu_item, line.selected_size, line.added_toppings, line.selected_option
    )
    return line.model_copy(
        update={"quantity": quantity, "total_price": unit_price * quantity}
    )


def adjust_quantity(line: CartItem, delta: int) -> CartItem:
    """Apply a +/- step from the till; the quantity never drops below 1."""
    return with_quantity(line, max(1, line.quantity + delta))
