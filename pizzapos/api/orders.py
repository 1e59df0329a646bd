"""Order API endpoints."""
import logging
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import BaseModel

from pizzapos.core.dependencies import get_catalog_repository
from pizzapos.db.database import get_db
from pizzapos.db.models import Order
from pizzapos.services.catalog.repository import CatalogRepository
from pizzapos.services.ordering.models import SubmitOrderRequest
from pizzapos.services.ordering.submission import OrderSubmissionService, OrderValidationError
from pizzapos.services.ordering.ticket import sort_ticket_lines
from pizzapos.services.persistence.orders import OrderPersistenceService
from pizzapos.services.pricing.errors import CatalogLookupError, InvalidArgument
from pizzapos.services.pricing.totals import money


router = APIRouter()
logger = logging.getLogger(__name__)


class OrderLineResponse(BaseModel):
    """Order line response model."""
    menu_item_id: str
    name: str
    category_id: str
    quantity: int
    selected_size: str | None = None
    total_price: float
    notes: str | None = None
    sub_items: List[str] = []


class OrderResponse(BaseModel):
    """Order response model."""
    id: str
    created_at: str
    staff_id: str
    status: str
    order_type: str
    customer_name: str
    customer_phone: str | None = None
    delivery_address: str | None = None
    subtotal: float
    discount: float
    total: float
    auto_deals_enabled: bool
    manual_discount: dict | None = None
    applied_deals: List[dict] = []
    lines: List[OrderLineResponse] = []


class SyncResponse(BaseModel):
    synced: int


def _line_response(line) -> OrderLineResponse:
    sub_items = [
        sub["item"]["name"] for sub in (line.snapshot or {}).get("sub_items", [])
    ]
    return OrderLineResponse(
        menu_item_id=line.menu_item_id,
        name=line.name,
        category_id=line.category_id,
        quantity=line.quantity,
        selected_size=line.selected_size,
        total_price=money(line.total_price),
        notes=line.notes,
        sub_items=sub_items,
    )


def build_order_response(order: Order, lines=None) -> OrderResponse:
    return OrderResponse(
        id=order.id,
        created_at=order.created_at.isoformat() if order.created_at else "",
        staff_id=order.staff_id,
        status=order.status,
        order_type=order.order_type,
        customer_name=order.customer_name,
        customer_phone=order.customer_phone,
        delivery_address=order.delivery_address,
        subtotal=money(order.subtotal),
        discount=money(order.discount),
        total=money(order.total),
        auto_deals_enabled=order.auto_deals_enabled,
        manual_discount=order.manual_discount,
        applied_deals=order.applied_deals or [],
        lines=[_line_response(line) for line in (lines if lines is not None else order.lines)],
    )


@router.post("/api/orders", response_model=OrderResponse)
async def submit_order(
    order_request: SubmitOrderRequest,
    db: AsyncSession = Depends(get_db),
    catalog_repository: CatalogRepository = Depends(get_catalog_repository),
):
    """Validate, price and store an order."""
    logger.info(
        f"[ORDERS] Submission received - {len(order_request.lines)} lines, "
        f"staff: {order_request.staff_id}, offline: {order_request.offline}"
    )
    service = OrderSubmissionService(db, catalog_repository)

    try:
        order = await service.submit(order_request)
    except OrderValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors)
    except CatalogLookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidArgument as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error(
            f"[ORDERS] Error submitting order - Error: {type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail=f"Error submitting order: {str(e)}")

    return build_order_response(order)


@router.get("/api/orders", response_model=List[OrderResponse])
async def get_order_history(
    since: Optional[datetime] = None,
    until: Optional[datetime] = None,
    limit: int = 100,
    db: AsyncSession = Depends(get_db),
):
    """Get orders, newest first."""
    logger.info(f"[ORDERS HISTORY] Request received - since: {since}, until: {until}, limit: {limit}")

    try:
        orders = await OrderPersistenceService(db).list_orders(since=since, until=until, limit=limit)
        logger.info(f"[ORDERS HISTORY] Found {len(orders)} orders")
        return [build_order_response(order) for order in orders]

    except Exception as e:
        logger.error(
            f"[ORDERS HISTORY] Error fetching order history - "
            f"limit: {limit}, Error: {type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail=f"Error fetching order history: {str(e)}")


@router.post("/api/orders/sync", response_model=SyncResponse)
async def sync_orders(db: AsyncSession = Depends(get_db)):
    """Mark queued (offline) orders as synced."""
    synced = await OrderPersistenceService(db).sync_queued_orders()
    logger.info(f"[ORDERS] Synced {synced} queued orders")
    return SyncResponse(synced=synced)


@router.get("/api/orders/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, db: AsyncSession = Depends(get_db)):
    """Get one order."""
    order = await OrderPersistenceService(db).get_order_by_id(order_id)
    if order is None:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")
    return build_order_response(order)


@router.get("/api/orders/{order_id}/ticket", response_model=OrderResponse)
async def get_order_ticket(
    order_id: str,
    db: AsyncSession = Depends(get_db),
    catalog_repository: CatalogRepository = Depends(get_catalog_repository),
):
    """Get an order with lines in kitchen ticket order."""
    order = await OrderPersistenceService(db).get_order_by_id(order_id)
    if order is None:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")
    priorities = await catalog_repository.get_ticket_priorities()
    return build_order_response(order, lines=sort_ticket_lines(order.lines, priorities))
