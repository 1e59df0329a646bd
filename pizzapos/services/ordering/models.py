"""Order request models."""
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field

from pizzapos.services.catalog.base import PizzaSize
from pizzapos.services.pricing.models import ManualDiscount


class OrderType(str, Enum):
    PICKUP = "pickup"
    DELIVERY = "delivery"


class OrderStatus(str, Enum):
    QUEUED = "queued"
    SYNCED = "synced"


class SubItemRequest(BaseModel):
    """Choice for one slot of a composite item, by catalog id."""

    config_id: str
    item_id: str
    size: Optional[PizzaSize] = None


class CartLineRequest(BaseModel):
    """Cart line as sent by the till, referencing catalog ids."""

    item_id: str
    quantity: int = 1
    size: Optional[PizzaSize] = None
    topping_ids: List[str] = []
    removed_topping_ids: List[str] = []
    option_id: Optional[str] = None
    sub_items: List[SubItemRequest] = []
    notes: Optional[str] = None
    extra_charge_qty: int = Field(default=0, ge=0)  # Staff +$1 steps


class LinePriceRequest(CartLineRequest):
    """One line re-priced after a +/- quantity step on the till."""

    quantity_delta: int = 0


class CartRequest(BaseModel):
    """Cart plus the discount switches that affect its price."""

    lines: List[CartLineRequest] = []
    manual_discount: Optional[ManualDiscount] = None
    auto_deals_enabled: Optional[bool] = None  # None uses the configured default


class OrderDetails(BaseModel):
    """Customer and fulfilment details captured at submission."""

    order_type: OrderType = OrderType.PICKUP
    customer_name: str = ""
    customer_phone: Optional[str] = None
    delivery_address: Optional[str] = None


class SubmitOrderRequest(CartRequest):
    """Order submission payload."""

    details: OrderDetails
    staff_id: str
    offline: bool = False
