"""Order submission and cart quoting."""
import logging
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from pizzapos.core.config import settings
from pizzapos.db.models import Order
from pizzapos.services.catalog.repository import CatalogRepository
from pizzapos.services.ordering.cart import CartBuilder
from pizzapos.services.ordering.models import CartRequest, OrderStatus, SubmitOrderRequest
from pizzapos.services.ordering.validator import OrderValidator
from pizzapos.services.persistence.orders import OrderPersistenceService
from pizzapos.services.pricing.models import CartItem, OrderTotals
from pizzapos.services.pricing.totals import compute_order_totals

logger = logging.getLogger(__name__)


class OrderValidationError(Exception):
    """Raised when a submission fails validation."""

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


def resolve_auto_deals(flag: Optional[bool]) -> bool:
    return settings.auto_deals_enabled if flag is None else flag


async def quote_cart(
    request: CartRequest, catalog_repository: CatalogRepository
) -> Tuple[List[CartItem], OrderTotals]:
    """Build and price a cart. Used for the live preview and for submission."""
    cart = await CartBuilder(catalog_repository).build_cart(request.lines)
    config = await catalog_repository.get_config()
    totals = compute_order_totals(
        cart,
        config,
        manual_discount=request.manual_discount,
        auto_deals_enabled=resolve_auto_deals(request.auto_deals_enabled),
    )
    return cart, totals


class OrderSubmissionService:
    """Validates, prices and stores orders."""

    def __init__(self, db: AsyncSession, catalog_repository: CatalogRepository):
        self.catalog_repository = catalog_repository
        self.validator = OrderValidator()
        self.persistence = OrderPersistenceService(db)

    async def submit(self, request: SubmitOrderRequest) -> Order:
        """
        Submit an order.

        Raises:
            OrderValidationError: if details or cart are incomplete
            InvalidArgument: if a line has an invalid quantity or sub-item
            CatalogLookupError: if a line references an unknown id
        """
        errors = self.validator.validate(request)
        if errors:
            logger.info(f"[ORDERS] Submission rejected: {errors}")
            raise OrderValidationError(errors)

        cart, totals = await quote_cart(request, self.catalog_repository)
        status = OrderStatus.QUEUED if request.offline else OrderStatus.SYNCED
        order = await self.persistence.create_order(
            cart,
            totals,
            request.details,
            staff_id=request.staff_id,
            manual_discount=request.manual_discount,
            auto_deals_enabled=resolve_auto_deals(request.auto_deals_enabled),
            status=status,
        )
        logger.info(
            f"[ORDERS] Order {order.id} submitted - {len(cart)} lines, "
            f"subtotal {totals.subtotal:.2f}, discount {totals.discount:.2f}, "
            f"total {totals.total:.2f}, status {order.status}"
        )
        return order
