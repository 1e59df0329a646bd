"""Order persistence service."""
import uuid
from datetime import datetime
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc, update
from sqlalchemy.orm import selectinload

from pizzapos.db.models import Order, OrderLine
from pizzapos.services.ordering.models import OrderDetails, OrderStatus
from pizzapos.services.pricing.models import CartItem, ManualDiscount, OrderTotals


class OrderPersistenceService:
    """Service for persisting order data."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_order(
        self,
        cart: List[CartItem],
        totals: OrderTotals,
        details: OrderDetails,
        staff_id: str,
        manual_discount: Optional[ManualDiscount] = None,
        auto_deals_enabled: bool = True,
        status: OrderStatus = OrderStatus.SYNCED,
    ) -> Order:
        """Store an order snapshot with the totals it was charged."""
        order = Order(
            id=str(uuid.uuid4()),
            created_at=datetime.utcnow(),
            staff_id=staff_id,
            status=status.value,
            order_type=details.order_type.value,
            customer_name=details.customer_name.strip(),
            customer_phone=details.customer_phone,
            delivery_address=details.delivery_address,
            subtotal=totals.subtotal,
            discount=totals.discount,
            total=totals.total,
            manual_discount=manual_discount.model_dump(mode="json") if manual_discount else None,
            auto_deals_enabled=auto_deals_enabled,
            applied_deals=[deal.model_dump(mode="json") for deal in totals.applied_deals],
        )
        for position, line in enumerate(cart):
            order.lines.append(
                OrderLine(
                    position=position,
                    menu_item_id=line.menu_item.id,
                    name=line.menu_item.name,
                    category_id=line.menu_item.category_id,
                    quantity=line.quantity,
                    selected_size=line.selected_size.value if line.selected_size else None,
                    total_price=line.total_price,
                    notes=line.notes,
                    snapshot=line.model_dump(mode="json"),
                )
            )
        self.db.add(order)
        await self.db.commit()
        return await self.get_order_by_id(order.id)

    async def get_order_by_id(self, order_id: str) -> Optional[Order]:
        """Get order by ID with lines."""
        result = await self.db.execute(
            select(Order)
            .where(Order.id == order_id)
            .options(selectinload(Order.lines))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_orders(
        self,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[Order]:
        """Orders newest first, optionally limited to [since, until)."""
        query = select(Order).options(selectinload(Order.lines))
        if since is not None:
            query = query.where(Order.created_at >= since)
        if until is not None:
            query = query.where(Order.created_at < until)
        query = query.order_by(desc(Order.created_at))
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def mark_synced(self, order_id: str) -> Optional[Order]:
        """Mark one order as synced."""
        order = await self.get_order_by_id(order_id)
        if order:
            order.status = OrderStatus.SYNCED.value
            await self.db.commit()
            order = await self.get_order_by_id(order_id)
        return order

    async def sync_queued_orders(self) -> int:
        """Mark every queued order as synced; returns how many changed."""
        result = await self.db.execute(
            update(Order)
            .where(Order.status == OrderStatus.QUEUED.value)
            .values(status=OrderStatus.SYNCED.value)
        )
        await self.db.commit()
        return result.rowcount
