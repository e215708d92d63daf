"""
Database configuration, session management and startup connectivity check
"""
from typing import Any, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from products_api.config import get_settings
from products_api.utils.logger import get_logger

settings = get_settings()
logger = get_logger(__name__)


# Sync URL prefix -> async driver prefix
ASYNC_DRIVERS = {
    "postgresql://": "postgresql+asyncpg://",
    "postgres://": "postgresql+asyncpg://",
    "sqlite:///": "sqlite+aiosqlite:///",
}


def _get_async_url(url: str) -> str:
    """Convert database URL to async variant"""
    for prefix, async_prefix in ASYNC_DRIVERS.items():
        if url.startswith(prefix):
            return async_prefix + url[len(prefix):]
    return url


def engine_options(url: str, echo: bool = False) -> Dict[str, Any]:
    """Keyword arguments for create_async_engine, pooled unless on SQLite"""
    options: Dict[str, Any] = {"echo": echo}
    if not url.startswith("sqlite"):
        options.update(pool_size=20, max_overflow=10, pool_pre_ping=True)
    return options


database_url = _get_async_url(settings.DATABASE_URL)
engine = create_async_engine(database_url, **engine_options(database_url, settings.DEBUG))

# Sessions keep loaded products usable after commit
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

# Base class for models
Base = declarative_base()


async def get_db() -> AsyncSession:
    """Dependency for getting database session"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def connect_db(db_engine: AsyncEngine) -> bool:
    """
    Authenticate against the database and create missing tables.

    Runs once at startup. A failure is logged and reported through the
    return value; the application keeps serving either way.
    """
    # Register models on Base.metadata before create_all
    import products_api.models  # noqa: F401

    try:
        async with db_engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            await conn.run_sync(Base.metadata.create_all)
    except Exception as e:
        logger.error(f"Database connection failed: {e}", exc_info=True)
        return False

    logger.info("Database connected")
    return True
