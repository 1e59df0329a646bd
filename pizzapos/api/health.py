"""Health check endpoint."""
import logging
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from pizzapos.core.config import settings
from pizzapos.core.dependencies import get_catalog_repository
from pizzapos.services.catalog.repository import CatalogRepository

router = APIRouter()
logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    status: str
    restaurant: str
    menu_items: int
    active_deals: int
    catalog_warnings: int


@router.get("/health", response_model=HealthResponse)
async def health_check(
    catalog_repository: CatalogRepository = Depends(get_catalog_repository),
):
    """Liveness plus a summary of the loaded catalog."""
    catalog = await catalog_repository.get_catalog()
    warnings = await catalog_repository.integrity_warnings()
    status = "healthy" if catalog.items else "degraded"
    logger.debug(f"[HEALTH] {status} - {len(catalog.items)} items, {len(warnings)} warnings")
    return HealthResponse(
        status=status,
        restaurant=catalog.config.name or settings.restaurant_name,
        menu_items=len(catalog.items),
        active_deals=len(catalog.config.active_discounts),
        catalog_warnings=len(warnings),
    )
