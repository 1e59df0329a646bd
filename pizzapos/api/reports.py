"""Reporting API endpoints."""
import logging
from datetime import datetime, timedelta
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pizzapos.db.database import get_db
from pizzapos.services.persistence.orders import OrderPersistenceService
from pizzapos.services.reporting.sales import SalesSummary, summarize_sales


router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/api/reports/sales", response_model=SalesSummary)
async def get_sales_summary(
    since: Optional[datetime] = None,
    until: Optional[datetime] = None,
    db: AsyncSession = Depends(get_db),
):
    """Sales summary for a period; defaults to today."""
    if since is None:
        since = datetime.utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
    if until is None:
        until = since + timedelta(days=1)

    orders = await OrderPersistenceService(db).list_orders(since=since, until=until)
    summary = summarize_sales(orders)
    logger.info(
        f"[REPORTS] Sales {since.isoformat()} - {until.isoformat()}: "
        f"{summary.order_count} orders, net {summary.net_sales:.2f}"
    )
    return summary
