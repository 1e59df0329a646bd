"""Order totals: the one place a cart is priced."""
import logging
from typing import Optional, Sequence

from pizzapos.services.catalog.base import TenantConfig
from pizzapos.services.pricing.models import (
    CartItem,
    ManualDiscount,
    ManualDiscountType,
    OrderTotals,
)
from pizzapos.services.pricing.promotions import PromotionEngine
from pizzapos.services.pricing.units import UnitPool

logger = logging.getLogger(__name__)


def apply_manual_discount(
    running_total: float, manual_discount: Optional[ManualDiscount]
) -> float:
    """
    Amount taken off by a staff discount.

    Percentages apply to the total after automatic deals. Fixed amounts are
    not capped here; the order total is floored at zero afterwards.
    """
    if manual_discount is None:
        return 0.0
    if manual_discount.type == ManualDiscountType.PERCENTAGE:
        return running_total * (manual_discount.value / 100)
    return manual_discount.value


def compute_order_totals(
    cart: Sequence[CartItem],
    config: TenantConfig,
    manual_discount: Optional[ManualDiscount] = None,
    auto_deals_enabled: bool = True,
) -> OrderTotals:
    """
    Price a cart: subtotal, automatic deals, manual discount and final total.

    Both the live cart quote and order submission call this function, so
    the discount shown to staff is the discount charged. A fresh unit pool
    is built on every call and the cart is never modified.

    Raises:
        InvalidArgument: if a cart line has a quantity below 1
    """
    subtotal = sum(line.total_price for line in cart)
    pool = UnitPool.from_cart(cart)

    applied_deals = []
    auto_discount = 0.0
    if auto_deals_enabled:
        result = PromotionEngine(config.active_discounts).apply(pool)
        applied_deals = result.applied_deals
        auto_discount = result.discount

    manual_amount = apply_manual_discount(subtotal - auto_discount, manual_discount)

    total_discount = auto_discount + manual_amount
    final_total = max(0.0, subtotal - total_discount)

    return OrderTotals(
        subtotal=subtotal,
        auto_discount=auto_discount,
        manual_discount=manual_amount,
        discount=total_discount,
        total=final_total,
        applied_deals=applied_deals,
    )


def money(value: float) -> float:
    """Round for display; computation keeps full precision."""
    return round(value, 2)
