"""Automatic deal matching."""
import logging
from typing import List, Optional, Sequence

from pydantic import BaseModel

from pizzapos.services.catalog.base import (
    BogoRule,
    ComboRequirement,
    ComboRule,
    DiscountRule,
    PercentageRule,
)
from pizzapos.services.pricing.models import AppliedDeal
from pizzapos.services.pricing.units import UnitPool

logger = logging.getLogger(__name__)


class PromotionResult(BaseModel):
    """Deals that matched and their combined discount."""

    applied_deals: List[AppliedDeal] = []

    @property
    def discount(self) -> float:
        return sum(deal.amount_saved for deal in self.applied_deals)


class PromotionEngine:
    """
    Applies automatic deals to a unit pool.

    Deals run by type in a fixed order: every COMBO rule, then every BOGO
    rule, then every PERCENTAGE rule, each group in list order. A unit used
    by one deal is never offered to a later one. Changing this order changes
    what customers are charged.
    """

    def __init__(self, rules: Sequence[DiscountRule]):
        self.rules = list(rules)

    def apply(self, pool: UnitPool) -> PromotionResult:
        """Match every rule against the pool, marking consumed units as used."""
        applied = []
        passes = (
            (ComboRule, self._apply_combo),
            (BogoRule, self._apply_bogo),
            (PercentageRule, self._apply_percentage),
        )
        for rule_class, handler in passes:
            for rule in self.rules:
                if not isinstance(rule, rule_class):
                    continue
                if not rule.is_configured():
                    logger.debug(f"[PRICING] Skipping incomplete deal '{rule.name}'")
                    continue
                deal = handler(pool, rule)
                if deal is not None:
                    applied.append(deal)

        result = PromotionResult(applied_deals=applied)
        if applied:
            logger.debug(
                f"[PRICING] {len(applied)} deals applied, "
                f"{pool.used_count}/{len(pool)} units used, "
                f"discount {result.discount:.2f}"
            )
        return result

    def _match_requirement(
        self, pool: UnitPool, req: ComboRequirement, taken: set
    ) -> Optional[List[int]]:
        """First `req.quantity` unused units in pool order that fit the requirement."""
        matched = []
        for i, unit in enumerate(pool):
            if len(matched) >= req.quantity:
                break
            if unit.used or i in taken:
                continue
            if unit.category_id != req.category_id:
                continue
            if req.required_item_id and unit.menu_item.id != req.required_item_id:
                continue
            if req.required_size and unit.selected_size != req.required_size:
                continue
            matched.append(i)
        if len(matched) < req.quantity:
            return None
        return matched

    def _match_combo(self, pool: UnitPool, rule: ComboRule) -> Optional[List[int]]:
        """Units for one full combo, or None when any requirement falls short."""
        taken: List[int] = []
        for req in rule.combo_requirements:
            matched = self._match_requirement(pool, req, set(taken))
            if matched is None:
                return None
            taken.extend(matched)
        return taken

    def _apply_combo(self, pool: UnitPool, rule: ComboRule) -> Optional[AppliedDeal]:
        combos_found = 0
        saving = 0.0

        while True:
            indices = self._match_combo(pool, rule)
            if indices is None:
                break
            original_price = sum(pool[i].unit_price for i in indices)
            pool.mark_used(indices)
            # A combo never costs more than buying the items separately
            saving += max(0.0, original_price - rule.value)
            combos_found += 1

        if combos_found == 0:
            return None
        return AppliedDeal(
            rule_id=rule.id,
            rule_name=rule.name,
            rule_type=rule.type,
            times_applied=combos_found,
            amount_saved=saving,
        )

    def _apply_bogo(self, pool: UnitPool, rule: BogoRule) -> Optional[AppliedDeal]:
        available = pool.unused_in_category(rule.target_category_id)
        # Cheapest units get the discount
        available.sort(key=lambda i: pool[i].unit_price)

        group_size = rule.buy_quantity + rule.get_quantity
        groups = len(available) // group_size
        if groups == 0:
            return None
        discounted = available[: groups * rule.get_quantity]

        saving = sum(pool[i].unit_price * (rule.value / 100) for i in discounted)
        pool.mark_used(discounted)
        return AppliedDeal(
            rule_id=rule.id,
            rule_name=rule.name,
            rule_type=rule.type,
            times_applied=groups,
            amount_saved=saving,
        )

    def _apply_percentage(
        self, pool: UnitPool, rule: PercentageRule
    ) -> Optional[AppliedDeal]:
        available = pool.unused_in_category(rule.target_category_id)
        if not available:
            return None

        saving = sum(pool[i].unit_price * (rule.value / 100) for i in available)
        pool.mark_used(available)
        return AppliedDeal(
            rule_id=rule.id,
            rule_name=rule.name,
            rule_type=rule.type,
            times_applied=len(available),
            amount_saved=saving,
        )
