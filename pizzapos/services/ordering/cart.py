"""Cart building from till requests."""
import logging
from typing import List, Optional, Sequence

from pizzapos.services.catalog.base import MenuItem, PizzaSize, PricingType, Topping, ToppingType
from pizzapos.services.catalog.repository import CatalogRepository
from pizzapos.services.ordering.models import CartLineRequest, LinePriceRequest, SubItemRequest
from pizzapos.services.pricing.calculator import adjust_quantity, price_cart_item
from pizzapos.services.pricing.errors import CatalogLookupError, InvalidArgument
from pizzapos.services.pricing.models import CartItem, SubItemSelection

logger = logging.getLogger(__name__)

EXTRA_CHARGE_PRICE = 1.00


class CartBuilder:
    """Resolves catalog ids in cart requests into priced cart lines."""

    def __init__(self, catalog_repository: CatalogRepository):
        self.catalog_repository = catalog_repository

    async def _get_item(self, item_id: str) -> MenuItem:
        item = await self.catalog_repository.get_item(item_id)
        if item is None:
            raise CatalogLookupError(f"Unknown menu item '{item_id}'")
        return item

    async def _get_topping(self, topping_id: str) -> Topping:
        topping = await self.catalog_repository.get_topping(topping_id)
        if topping is None:
            raise CatalogLookupError(f"Unknown topping '{topping_id}'")
        return topping

    async def _build_sub_item(
        self, parent: MenuItem, request: SubItemRequest, parent_size: Optional[PizzaSize]
    ) -> SubItemSelection:
        config = parent.get_sub_item_config(request.config_id)
        if config is None:
            raise InvalidArgument(
                f"'{parent.name}' has no choice slot '{request.config_id}'"
            )
        item = await self._get_item(request.item_id)
        if not item.available:
            raise InvalidArgument(f"'{item.name}' is not available")
        if config.force_item_id and item.id != config.force_item_id:
            raise InvalidArgument(
                f"Slot '{config.name}' of '{parent.name}' only accepts item '{config.force_item_id}'"
            )
        if config.allow_categories and item.category_id not in config.allow_categories:
            raise InvalidArgument(
                f"'{item.name}' cannot fill slot '{config.name}' of '{parent.name}'"
            )
        size = config.force_size or request.size or parent_size
        return SubItemSelection(config_id=config.id, item=item, selected_size=size)

    def _check_size(self, item: MenuItem, size: Optional[PizzaSize]) -> None:
        if item.pricing_type != PricingType.SIZE_BASED:
            return
        if size is None:
            raise InvalidArgument(f"'{item.name}' needs a size")
        if item.available_sizes and size not in item.available_sizes:
            raise InvalidArgument(f"'{item.name}' is not sold in size {size.value}")

    def _check_modifiers(
        self,
        item: MenuItem,
        request: CartLineRequest,
        toppings: List[Topping],
        option: Optional[Topping],
    ) -> None:
        """Reject extras the catalog does not offer on this item and size."""
        if not item.allow_modifiers and (
            toppings or request.removed_topping_ids or request.extra_charge_qty
        ):
            raise InvalidArgument(f"'{item.name}' cannot be modified")

        size = request.size if item.pricing_type == PricingType.SIZE_BASED else None
        for topping in toppings:
            if topping.id in item.required_selection_ids:
                raise InvalidArgument(
                    f"'{topping.name}' is a required choice for '{item.name}', not an extra"
                )
            if not topping.is_available_for(size):
                raise InvalidArgument(
                    f"'{topping.name}' is not available on '{item.name}'"
                    + (f" in size {size.value}" if size else "")
                )
        if sum(1 for t in toppings if t.type == ToppingType.BASE_OPTION) > 1:
            raise InvalidArgument(f"Only one base can be chosen for '{item.name}'")

        if option is not None:
            if option.id not in item.required_selection_ids:
                raise InvalidArgument(
                    f"'{option.name}' is not one of the choices for '{item.name}'"
                )
            if not option.is_available_for(size):
                raise InvalidArgument(f"'{option.name}' is not available on '{item.name}'")

    async def build_line(self, request: CartLineRequest) -> CartItem:
        """Resolve one line, check it against the catalog and price it."""
        item = await self._get_item(request.item_id)
        if not item.available:
            raise InvalidArgument(f"'{item.name}' is not available")
        self._check_size(item, request.size)

        toppings = [await self._get_topping(tid) for tid in request.topping_ids]
        option = None
        if request.option_id:
            option = await self._get_topping(request.option_id)
        self._check_modifiers(item, request, toppings, option)

        if request.extra_charge_qty:
            toppings.append(
                Topping(
                    id="extra-charge",
                    name=f"Extra Charge (x{request.extra_charge_qty})",
                    price=request.extra_charge_qty * EXTRA_CHARGE_PRICE,
                    type=ToppingType.OPTION,
                )
            )

        sub_items = [
            await self._build_sub_item(item, sub, request.size)
            for sub in request.sub_items
        ]
        return price_cart_item(
            item,
            quantity=request.quantity,
            size=request.size,
            added_toppings=toppings,
            removed_toppings=list(request.removed_topping_ids),
            selected_option=option,
            sub_items=sub_items,
            notes=request.notes,
        )

    async def price_line(self, request: LinePriceRequest) -> CartItem:
        """Price one line after a +/- step; the quantity never drops below 1."""
        line = await self.build_line(request)
        if request.quantity_delta:
            line = adjust_quantity(line, request.quantity_delta)
        return line

    async def build_cart(self, lines: Sequence[CartLineRequest]) -> List[CartItem]:
        """Resolve and price every line, keeping request order."""
        cart = [await self.build_line(line) for line in lines]
        logger.debug(f"[CART] Built cart with {len(cart)} lines")
        return cart
