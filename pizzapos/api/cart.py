"""Cart quote API endpoints."""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from pizzapos.core.dependencies import get_catalog_repository
from pizzapos.services.catalog.repository import CatalogRepository
from pizzapos.services.ordering.cart import CartBuilder
from pizzapos.services.ordering.models import CartRequest, LinePriceRequest
from pizzapos.services.ordering.submission import quote_cart
from pizzapos.services.pricing.errors import CatalogLookupError, InvalidArgument
from pizzapos.services.pricing.models import AppliedDeal, CartItem, OrderTotals
from pizzapos.services.pricing.totals import money


router = APIRouter()
logger = logging.getLogger(__name__)


class AppliedDealResponse(BaseModel):
    """Applied deal as shown in the cart summary."""
    rule_id: str
    name: str
    times_applied: int
    amount: float

    @classmethod
    def from_deal(cls, deal: AppliedDeal) -> "AppliedDealResponse":
        return cls(
            rule_id=deal.rule_id,
            name=deal.label,
            times_applied=deal.times_applied,
            amount=money(deal.amount_saved),
        )


class QuoteLineResponse(BaseModel):
    """Priced cart line."""
    id: str
    item_id: str
    name: str
    quantity: int
    size: str | None = None
    total_price: float


class QuoteResponse(BaseModel):
    """Cart quote response model."""
    lines: List[QuoteLineResponse] = []
    subtotal: float
    discount: float
    total: float
    applied_deals: List[AppliedDealResponse] = []


def build_line_response(line: CartItem) -> QuoteLineResponse:
    return QuoteLineResponse(
        id=line.id,
        item_id=line.menu_item.id,
        name=line.menu_item.name,
        quantity=line.quantity,
        size=line.selected_size.value if line.selected_size else None,
        total_price=money(line.total_price),
    )


def build_quote_response(cart: List[CartItem], totals: OrderTotals) -> QuoteResponse:
    return QuoteResponse(
        lines=[build_line_response(line) for line in cart],
        subtotal=money(totals.subtotal),
        discount=money(totals.discount),
        total=money(totals.total),
        applied_deals=[AppliedDealResponse.from_deal(d) for d in totals.applied_deals],
    )


@router.post("/api/cart/quote", response_model=QuoteResponse)
async def quote(
    cart_request: CartRequest,
    catalog_repository: CatalogRepository = Depends(get_catalog_repository),
):
    """Price a cart exactly as it would be charged on submission."""
    logger.debug(f"[CART] Quote requested - {len(cart_request.lines)} lines")

    try:
        cart, totals = await quote_cart(cart_request, catalog_repository)
    except CatalogLookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidArgument as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error(
            f"[CART] Error pricing cart - Error: {type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail=f"Error pricing cart: {str(e)}")

    return build_quote_response(cart, totals)


@router.post("/api/cart/line", response_model=QuoteLineResponse)
async def price_line(
    line_request: LinePriceRequest,
    catalog_repository: CatalogRepository = Depends(get_catalog_repository),
):
    """Price one configured line, applying a +/- quantity step."""
    try:
        line = await CartBuilder(catalog_repository).price_line(line_request)
    except CatalogLookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidArgument as e:
        raise HTTPException(status_code=422, detail=str(e))

    logger.debug(f"[CART] Line priced - {line.menu_item.id} x{line.quantity}: {line.total_price:.2f}")
    return build_line_response(line)
