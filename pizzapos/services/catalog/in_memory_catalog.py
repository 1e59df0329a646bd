"""In-memory catalog provider."""
import logging
import yaml
from pathlib import Path
from typing import Optional
from pizzapos.services.catalog.base import (
    Catalog,
    CatalogProvider,
    Category,
    MenuItem,
    Topping,
)

logger = logging.getLogger(__name__)


class InMemoryCatalogProvider(CatalogProvider):
    """In-memory catalog provider using YAML configuration."""

    def __init__(self, catalog_file: Optional[str] = None):
        """Initialize with optional catalog file path."""
        if catalog_file is None:
            catalog_file = Path(__file__).parent / "data" / "catalog.yaml"
        self.catalog_file = Path(catalog_file)
        self._catalog: Optional[Catalog] = None

    async def _load_catalog(self) -> Catalog:
        """Load catalog from YAML file."""
        if self._catalog is None:
            if not self.catalog_file.exists():
                logger.warning(
                    f"[CATALOG] Catalog file not found: {self.catalog_file} - using empty catalog"
                )
                self._catalog = Catalog()
            else:
                with open(self.catalog_file, "r") as f:
                    data = yaml.safe_load(f) or {}
                self._catalog = Catalog.model_validate(data)
                logger.info(
                    f"[CATALOG] Loaded {len(self._catalog.items)} items, "
                    f"{len(self._catalog.categories)} categories, "
                    f"{len(self._catalog.toppings)} toppings, "
                    f"{len(self._catalog.config.active_discounts)} deals "
                    f"from {self.catalog_file}"
                )
        return self._catalog

    async def get_catalog(self) -> Catalog:
        """Get the full catalog."""
        return await self._load_catalog()

    async def get_item(self, item_id: str) -> Optional[MenuItem]:
        """Get a menu item by id."""
        catalog = await self._load_catalog()
        for item in catalog.items:
            if item.id == item_id:
                return item
        return None

    async def get_topping(self, topping_id: str) -> Optional[Topping]:
        """Get a topping by id."""
        catalog = await self._load_catalog()
        for topping in catalog.toppings:
            if topping.id == topping_id:
                return topping
        return None

    async def get_category(self, category_id: str) -> Optional[Category]:
        """Get a category by id."""
        catalog = await self._load_catalog()
        for category in catalog.categories:
            if category.id == category_id:
                return category
        return None
