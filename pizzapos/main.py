"""Main FastAPI application."""
import uvicorn
from fastapi import FastAPI
from contextlib import asynccontextmanager

from pizzapos.core.config import settings
from pizzapos.core.dependencies import get_catalog_repository
from pizzapos.core.logging import setup_logging
from pizzapos.db.database import init_db
from pizzapos.api import health, menu, cart, orders, reports


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    await init_db()
    # Surface catalog problems at startup rather than at the till
    await get_catalog_repository().integrity_warnings()
    yield


app = FastAPI(
    title=f"{settings.restaurant_name} POS",
    description="Point-of-sale pricing and order service for a pizza shop",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router, tags=["health"])
app.include_router(menu.router, tags=["menu"])
app.include_router(cart.router, tags=["cart"])
app.include_router(orders.router, tags=["orders"])
app.include_router(reports.router, tags=["reports"])


@app.get("/")
async def root():
    """Service info."""
    return {
        "message": f"{settings.restaurant_name} POS API",
        "version": "0.1.0",
    }


def run() -> None:
    """Serve the API on the configured host and port."""
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
