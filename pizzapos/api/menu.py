"""Menu API endpoints."""
import logging
from fastapi import APIRouter, Depends, Request, HTTPException
from pizzapos.core.dependencies import get_catalog_repository
from pizzapos.services.catalog.base import Category, MenuItem, TenantConfig, Topping
from pizzapos.services.catalog.repository import CatalogRepository
from pydantic import BaseModel
from typing import List


router = APIRouter()
logger = logging.getLogger(__name__)


class MenuResponse(BaseModel):
    """Menu response model."""
    items: List[MenuItem]
    categories: List[Category] = []
    toppings: List[Topping] = []
    config: TenantConfig
    warnings: List[str] = []


@router.get("/api/menu", response_model=MenuResponse)
async def get_menu(
    request: Request,
    catalog_repository: CatalogRepository = Depends(get_catalog_repository),
):
    """Get the full menu, deals and any catalog problems."""
    logger.info(
        f"[MENU] Request received - Client: {request.client.host if request.client else 'unknown'}"
    )

    try:
        catalog = await catalog_repository.get_catalog()
        categories = await catalog_repository.get_sorted_categories()
        warnings = await catalog_repository.integrity_warnings()
        logger.info(
            f"[MENU] Menu loaded - {len(catalog.items)} items, "
            f"{len(categories)} categories, {len(warnings)} warnings"
        )
        return MenuResponse(
            items=catalog.items,
            categories=categories,
            toppings=catalog.toppings,
            config=catalog.config,
            warnings=warnings,
        )

    except Exception as e:
        logger.error(
            f"[MENU] Error fetching menu - Error: {type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail=f"Error fetching menu: {str(e)}")
