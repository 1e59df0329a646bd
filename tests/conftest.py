"""Shared test fixtures and configuration."""
import pytest
import os
from pathlib import Path
from httpx import ASGITransport, AsyncClient
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RESTAURANT_NAME", "Test Pizza")

from pizzapos.main import app
from pizzapos.db.database import Base, get_db
from pizzapos.core.dependencies import get_catalog_repository
from pizzapos.services.catalog.base import (
    BogoRule,
    ComboRequirement,
    ComboRule,
    MenuItem,
    PercentageRule,
    PricingType,
    TenantConfig,
    Topping,
)
from pizzapos.services.catalog.repository import CatalogRepository
from pizzapos.services.catalog.in_memory_catalog import InMemoryCatalogProvider
from pizzapos.services.pricing.calculator import price_cart_item


# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_db_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def test_db(test_db_engine):
    """Create test database session."""
    async_session = async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def test_catalog_path():
    """Return path to test catalog YAML file."""
    return Path(__file__).parent / "fixtures" / "test_catalog.yaml"


@pytest.fixture
def test_catalog_repository(test_catalog_path):
    """Create catalog repository with test data."""
    provider = InMemoryCatalogProvider(catalog_file=str(test_catalog_path))
    return CatalogRepository(provider)


@pytest.fixture
def override_get_db(test_db):
    """Override get_db dependency with test database."""
    async def _override_get_db():
        yield test_db
    return _override_get_db


@pytest.fixture
def override_get_catalog_repository(test_catalog_repository):
    """Override get_catalog_repository dependency with test catalog."""
    def _override_get_catalog_repository():
        return test_catalog_repository
    return _override_get_catalog_repository


@pytest.fixture
def test_client(override_get_catalog_repository):
    """FastAPI test client for endpoints that do not touch the database."""
    app.dependency_overrides[get_catalog_repository] = override_get_catalog_repository

    client = TestClient(app)

    yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def api_client(override_get_db, override_get_catalog_repository):
    """Async client sharing the event loop with the test database."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_catalog_repository] = override_get_catalog_repository

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Pricing fixtures: small in-code catalog for the engine tests


def _make_item(item_id, category_id, price=None, size_prices=None):
    """Build a FIXED item, or a SIZE_BASED one when size_prices is given."""
    if size_prices is not None:
        return MenuItem(
            id=item_id,
            name=item_id.title(),
            category_id=category_id,
            pricing_type=PricingType.SIZE_BASED,
            size_prices=size_prices,
            available_sizes=list(size_prices),
        )
    return MenuItem(
        id=item_id,
        name=item_id.title(),
        category_id=category_id,
        pricing_type=PricingType.FIXED,
        price=price,
    )


def _make_line(item, quantity=1, size=None, toppings=None, option=None):
    return price_cart_item(
        item, quantity=quantity, size=size, added_toppings=toppings, selected_option=option
    )


@pytest.fixture
def make_item():
    """Factory for menu items."""
    return _make_item


@pytest.fixture
def make_line():
    """Factory for priced cart lines."""
    return _make_line


@pytest.fixture
def cheese():
    return Topping(id="t1", name="Mozzarella", price=2.0)


@pytest.fixture
def bbq_base():
    return Topping(id="t_bbq", name="BBQ Base", price=1.5, type="SAUCE_OPTION")


@pytest.fixture
def combo_rule():
    return ComboRule(
        id="d_combo",
        name="Two Pizza Deal",
        value=18.0,
        combo_requirements=[ComboRequirement(category_id="c1", quantity=2)],
    )


@pytest.fixture
def bogo_rule():
    return BogoRule(
        id="d_bogo",
        name="Sides BOGO",
        value=100,
        target_category_id="c4",
        buy_quantity=1,
        get_quantity=1,
    )


@pytest.fixture
def percentage_rule():
    return PercentageRule(
        id="d_pct",
        name="20% Off Gourmet",
        value=20,
        target_category_id="c2",
    )


@pytest.fixture
def empty_config():
    return TenantConfig(name="Test Pizza")
