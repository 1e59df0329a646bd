"""Unit tests for item price calculation."""
import pytest

from pizzapos.services.catalog.base import PizzaSize
from pizzapos.services.pricing.calculator import (
    adjust_quantity,
    compute_unit_price,
    price_cart_item,
    with_quantity,
)
from pizzapos.services.pricing.errors import InvalidArgument


class TestComputeUnitPrice:
    """Test unit price of a configured item."""

    def test_fixed_price_ignores_size(self, make_item, cheese, bbq_base):
        """FIXED items cost price + toppings + option whatever the size."""
        wedges = make_item("wedges", "c4", price=8.5)

        for size in [None, PizzaSize.SMALL, PizzaSize.FAMILY]:
            price = compute_unit_price(wedges, size, [cheese], bbq_base)
            assert price == pytest.approx(8.5 + 2.0 + 1.5)

    def test_fixed_price_missing_is_zero(self, make_item, cheese):
        """A FIXED item without a price is charged only for extras."""
        freebie = make_item("freebie", "c4", price=None)
        assert compute_unit_price(freebie, None, [cheese]) == pytest.approx(2.0)

    def test_size_based_price(self, make_item):
        """SIZE_BASED items use the price of the chosen size."""
        pizza = make_item("margherita", "c1", size_prices={"Small": 12, "Large": 20})

        assert compute_unit_price(pizza, PizzaSize.SMALL) == 12
        assert compute_unit_price(pizza, PizzaSize.LARGE) == 20

    def test_size_based_missing_size_price(self, make_item, cheese, bbq_base):
        """Scenario E: a size with no price counts as zero, plus extras."""
        pizza = make_item("margherita", "c1", size_prices={"Small": 10})

        price = compute_unit_price(pizza, PizzaSize.LARGE, [cheese], bbq_base)

        assert price == pytest.approx(3.5)

    def test_size_based_without_size(self, make_item):
        """No size chosen means no base price."""
        pizza = make_item("margherita", "c1", size_prices={"Small": 10})
        assert compute_unit_price(pizza, None) == 0

    def test_toppings_are_summed(self, make_item, cheese):
        """Every added topping is charged, duplicates included."""
        pizza = make_item("margherita", "c1", size_prices={"Medium": 16})

        price = compute_unit_price(pizza, PizzaSize.MEDIUM, [cheese, cheese])

        assert price == pytest.approx(20.0)


class TestCartLines:
    """Test building and re-pricing cart lines."""

    def test_price_cart_item_total(self, make_item, cheese):
        """Line total is unit price times quantity."""
        pizza = make_item("margherita", "c1", size_prices={"Large": 20})

        line = price_cart_item(pizza, quantity=3, size=PizzaSize.LARGE, added_toppings=[cheese])

        assert line.total_price == pytest.approx(66.0)
        assert line.quantity == 3
        assert line.selected_size == PizzaSize.LARGE
        assert line.id

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_price_cart_item_rejects_bad_quantity(self, make_item, quantity):
        """Quantities below 1 are a programming error."""
        wedges = make_item("wedges", "c4", price=8.5)
        with pytest.raises(InvalidArgument):
            price_cart_item(wedges, quantity=quantity)

    def test_with_quantity_reprices(self, make_item, cheese):
        """Changing quantity keeps total == unit price * quantity."""
        pizza = make_item("margherita", "c1", size_prices={"Large": 20})
        line = price_cart_item(pizza, quantity=1, size=PizzaSize.LARGE, added_toppings=[cheese])

        updated = with_quantity(line, 4)

        assert updated.total_price == pytest.approx(88.0)
        assert updated.id == line.id
        assert line.quantity == 1  # original untouched

    def test_with_quantity_rejects_zero(self, make_item):
        wedges = make_item("wedges", "c4", price=8.5)
        line = price_cart_item(wedges)
        with pytest.raises(InvalidArgument):
            with_quantity(line, 0)

    def test_adjust_quantity_clamps_at_one(self, make_item):
        """The minus button never takes a line below one."""
        wedges = make_item("wedges", "c4", price=8.5)
        line = price_cart_item(wedges, quantity=2)

        line = adjust_quantity(line, -5)

        assert line.quantity == 1
        assert line.total_price == pytest.approx(8.5)

        line = adjust_quantity(line, 2)
        assert line.quantity == 3
        assert line.total_price == pytest.approx(25.5)
