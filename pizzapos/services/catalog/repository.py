"""Catalog repository."""
import logging
from typing import List, Optional
from pizzapos.services.catalog.base import (
    BogoRule,
    Catalog,
    CatalogProvider,
    Category,
    MenuItem,
    PercentageRule,
    PricingType,
    TenantConfig,
    Topping,
)

logger = logging.getLogger(__name__)

DEFAULT_TICKET_PRIORITY = 999


class CatalogRepository:
    """Repository for catalog operations."""

    def __init__(self, provider: CatalogProvider):
        self.provider = provider

    async def get_catalog(self) -> Catalog:
        """Get the full catalog."""
        return await self.provider.get_catalog()

    async def get_config(self) -> TenantConfig:
        """Get the tenant configuration, including active deals."""
        catalog = await self.provider.get_catalog()
        return catalog.config

    async def get_item(self, item_id: str) -> Optional[MenuItem]:
        """Get item by id."""
        return await self.provider.get_item(item_id)

    async def get_topping(self, topping_id: str) -> Optional[Topping]:
        """Get topping by id."""
        return await self.provider.get_topping(topping_id)

    async def get_category(self, category_id: str) -> Optional[Category]:
        """Get category by id."""
        return await self.provider.get_category(category_id)

    async def get_sorted_categories(self) -> List[Category]:
        """Get categories in display order."""
        catalog = await self.provider.get_catalog()
        return sorted(catalog.categories, key=lambda c: c.sort_order)

    async def get_ticket_priorities(self) -> dict:
        """Map category id to kitchen ticket priority."""
        catalog = await self.provider.get_catalog()
        return {
            c.id: (
                c.ticket_priority
                if c.ticket_priority is not None
                else DEFAULT_TICKET_PRIORITY
            )
            for c in catalog.categories
        }

    async def integrity_warnings(self) -> List[str]:
        """
        Report catalog data that prices silently as zero or can never match.

        Checkout still works with these problems; they are meant to be fixed
        in the catalog rather than at the counter.
        """
        catalog = await self.provider.get_catalog()
        category_ids = {c.id for c in catalog.categories}
        warnings = []

        for item in catalog.items:
            if item.category_id not in category_ids:
                warnings.append(
                    f"Item '{item.name}' references unknown category '{item.category_id}'"
                )
            if item.pricing_type == PricingType.FIXED:
                if item.price is None:
                    warnings.append(f"Item '{item.name}' has no fixed price")
            else:
                if not item.size_prices:
                    warnings.append(f"Item '{item.name}' has no size prices")
                for size in item.available_sizes:
                    if size not in item.size_prices:
                        warnings.append(
                            f"Item '{item.name}' is missing a price for size {size.value}"
                        )

        for rule in catalog.config.active_discounts:
            if not rule.is_configured():
                warnings.append(
                    f"Deal '{rule.name}' is incomplete and will be skipped"
                )
                continue
            if isinstance(rule, (PercentageRule, BogoRule)):
                targets = [rule.target_category_id]
            else:
                targets = [req.category_id for req in rule.combo_requirements]
            for target in targets:
                if target not in category_ids:
                    warnings.append(
                        f"Deal '{rule.name}' targets unknown category '{target}'"
                    )

        for warning in warnings:
            logger.warning(f"[CATALOG] {warning}")
        return warnings
