"""Pricing models."""
import uuid
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from pizzapos.services.catalog.base import MenuItem, PizzaSize, Topping


class ManualDiscountType(str, Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED = "FIXED"


class ManualDiscount(BaseModel):
    """Staff-entered discount applied after automatic deals."""

    type: ManualDiscountType
    value: float = Field(ge=0)

    @model_validator(mode="after")
    def check_percentage(self) -> "ManualDiscount":
        if self.type == ManualDiscountType.PERCENTAGE and self.value > 100:
            raise ValueError("Percentage discount cannot exceed 100")
        return self


class SubItemSelection(BaseModel):
    """Item chosen for one slot of a composite item."""

    config_id: str
    item: MenuItem
    selected_size: Optional[PizzaSize] = None


class CartItem(BaseModel):
    """One cart line: a configured menu item and its quantity."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    menu_item: MenuItem
    quantity: int = 1
    selected_size: Optional[PizzaSize] = None
    added_toppings: List[Topping] = []
    removed_toppings: List[str] = []
    selected_option: Optional[Topping] = None
    sub_items: List[SubItemSelection] = []
    notes: Optional[str] = None
    total_price: float = 0.0  # unit price * quantity


class AppliedDeal(BaseModel):
    """How much one automatic deal saved and how many times it matched."""

    rule_id: str
    rule_name: str
    rule_type: str
    times_applied: int
    amount_saved: float

    @property
    def label(self) -> str:
        if self.rule_type == "PERCENTAGE":
            return self.rule_name
        return f"{self.rule_name} (x{self.times_applied})"


class OrderTotals(BaseModel):
    """Result of pricing a cart."""

    subtotal: float = 0.0
    auto_discount: float = 0.0
    manual_discount: float = 0.0
    discount: float = 0.0
    total: float = 0.0
    applied_deals: List[AppliedDeal] = []
