"""Catalog models and provider interface."""
from abc import ABC, abstractmethod
from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class PizzaSize(str, Enum):
    """Sizes a size-based item can be sold in."""

    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"
    FAMILY = "Family"


class ToppingType(str, Enum):
    TOPPING = "TOPPING"
    SAUCE_OPTION = "SAUCE_OPTION"
    BASE_OPTION = "BASE_OPTION"
    SIDE = "SIDE"
    OPTION = "OPTION"


class PricingType(str, Enum):
    FIXED = "FIXED"
    SIZE_BASED = "SIZE_BASED"


class MenuItemType(str, Enum):
    SINGLE = "SINGLE"
    HALF_AND_HALF = "HALF_AND_HALF"
    BUNDLE = "BUNDLE"


class Topping(BaseModel):
    """Topping, sauce, base or side option with a flat price."""

    id: str
    name: str
    price: float = 0.0
    type: ToppingType = ToppingType.TOPPING
    available: bool = True
    available_sizes: List[PizzaSize] = []  # Empty means every size

    def is_available_for(self, size: Optional[PizzaSize]) -> bool:
        """Check whether the topping can go on an item of the given size."""
        if not self.available:
            return False
        if not self.available_sizes:
            return True
        # Size-restricted extras never go on unsized (FIXED) items
        return size is not None and size in self.available_sizes


class Category(BaseModel):
    """Menu category."""

    id: str
    name: str
    icon: Optional[str] = None
    sort_order: int = 0
    ticket_priority: Optional[int] = None  # Lower prints first


class SubItemConfig(BaseModel):
    """A choice slot inside a composite item, e.g. the left half of a pizza."""

    id: str
    name: str
    allow_categories: List[str] = []
    force_size: Optional[PizzaSize] = None
    force_item_id: Optional[str] = None


class MenuItem(BaseModel):
    """Menu item model."""

    id: str
    name: str
    category_id: str
    description: Optional[str] = None
    available: bool = True

    item_type: MenuItemType = MenuItemType.SINGLE
    sub_item_configs: List[SubItemConfig] = []
    allow_modifiers: bool = True

    pricing_type: PricingType = PricingType.FIXED
    price: Optional[float] = None
    size_prices: Dict[PizzaSize, float] = {}
    available_sizes: List[PizzaSize] = []

    default_toppings: List[str] = []
    required_selection_ids: List[str] = []
    required_selection_label: Optional[str] = None

    def get_sub_item_config(self, config_id: str) -> Optional[SubItemConfig]:
        for config in self.sub_item_configs:
            if config.id == config_id:
                return config
        return None


class ComboRequirement(BaseModel):
    """One slot of a combo: `quantity` units from a category."""

    category_id: str
    quantity: int = 1
    required_item_id: Optional[str] = None
    required_size: Optional[PizzaSize] = None


class PercentageRule(BaseModel):
    """Percent off every remaining unit in a category."""

    type: Literal["PERCENTAGE"] = "PERCENTAGE"
    id: str
    name: str
    value: float = 0.0
    target_category_id: Optional[str] = None

    def is_configured(self) -> bool:
        return bool(self.target_category_id)


class BogoRule(BaseModel):
    """Buy `buy_quantity`, get `get_quantity` of the cheapest at `value` percent off."""

    type: Literal["BOGO"] = "BOGO"
    id: str
    name: str
    value: float = 100.0
    target_category_id: Optional[str] = None
    buy_quantity: Optional[int] = None
    get_quantity: Optional[int] = None

    def is_configured(self) -> bool:
        return (
            bool(self.target_category_id)
            and (self.buy_quantity or 0) >= 1
            and (self.get_quantity or 0) >= 1
        )


class ComboRule(BaseModel):
    """Fixed bundle price (`value`) for a set of category requirements."""

    type: Literal["COMBO"] = "COMBO"
    id: str
    name: str
    value: float = 0.0
    combo_requirements: List[ComboRequirement] = []

    def is_configured(self) -> bool:
        return bool(self.combo_requirements) and all(
            req.quantity >= 1 for req in self.combo_requirements
        )


DiscountRule = Annotated[
    Union[PercentageRule, BogoRule, ComboRule], Field(discriminator="type")
]


class TenantConfig(BaseModel):
    """Store configuration, including the ordered list of automatic deals."""

    name: str = "Pizza Shop"
    address: Optional[str] = None
    abn: Optional[str] = None
    currency: str = "AUD"
    active_discounts: List[DiscountRule] = []


class Catalog(BaseModel):
    """Catalog model."""

    items: List[MenuItem] = []
    categories: List[Category] = []
    toppings: List[Topping] = []
    config: TenantConfig = Field(default_factory=TenantConfig)


class CatalogProvider(ABC):
    """Abstract base class for catalog providers."""

    @abstractmethod
    async def get_catalog(self) -> Catalog:
        """Get the full catalog."""
        pass

    @abstractmethod
    async def get_item(self, item_id: str) -> Optional[MenuItem]:
        """Get a menu item by id."""
        pass

    @abstractmethod
    async def get_topping(self, topping_id: str) -> Optional[Topping]:
        """Get a topping by id."""
        pass

    @abstractmethod
    async def get_category(self, category_id: str) -> Optional[Category]:
        """Get a category by id."""
        pass
