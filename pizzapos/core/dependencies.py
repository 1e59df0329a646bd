"""FastAPI dependencies."""
from pizzapos.core.config import settings
from pizzapos.services.catalog.repository import CatalogRepository
from pizzapos.services.catalog.in_memory_catalog import InMemoryCatalogProvider

_catalog_repository = CatalogRepository(
    provider=InMemoryCatalogProvider(catalog_file=settings.catalog_file)
)


def get_catalog_repository() -> CatalogRepository:
    """Get catalog repository instance."""
    return _catalog_repository
