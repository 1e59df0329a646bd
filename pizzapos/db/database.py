"""Database engine and session management."""
import logging
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from pizzapos.core.config import settings
from pizzapos.db.models import Base

logger = logging.getLogger(__name__)

_ASYNC_DRIVERS = {
    "postgresql://": "postgresql+asyncpg://",
    "sqlite://": "sqlite+aiosqlite://",
}


def async_url(url: str) -> str:
    """Plain postgresql:// and sqlite:// URLs get their async driver."""
    for plain, driver in _ASYNC_DRIVERS.items():
        if url.startswith(plain):
            return url.replace(plain, driver, 1)
    return url


def sync_url(url: str) -> str:
    """Inverse of async_url, for rendering offline migrations."""
    for plain, driver in _ASYNC_DRIVERS.items():
        if url.startswith(driver):
            return url.replace(driver, plain, 1)
    return url


database_url = async_url(settings.database_url)

engine = create_async_engine(
    database_url,
    echo=False,
    # Till requests may hop threads; SQLite refuses that by default
    connect_args={"check_same_thread": False} if database_url.startswith("sqlite") else {},
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def init_db() -> None:
    """Create missing tables. Schema changes go through alembic."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"[DB] Schema ready on {engine.url.render_as_string(hide_password=True)}")


async def get_db() -> AsyncSession:
    """Dependency for getting database session."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
