"""Database connection and session management"""
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from urllib.parse import urlparse, urlunparse
import logging
from seopanel.core.config import settings

# Setup logger
logger = logging.getLogger(__name__)


def mask_url(url: str) -> str:
    """Mask sensitive parts of database URL for logging"""
    try:
        parsed = urlparse(url)
        if parsed.password:
            netloc = parsed.netloc.replace(f":{parsed.password}@", ":***@", 1)
            return urlunparse(parsed._replace(netloc=netloc))
        return url
    except ValueError:
        if len(url) > 20:
            return f"{url[:10]}...{url[-10:]}"
        return "***"


def normalize_async_url(url: str) -> str:
    """Ensure PostgreSQL URLs use the asyncpg driver"""
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    if url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


database_url = normalize_async_url(settings.database_url)
logger.info(f"DATABASE_URL (async): {mask_url(database_url)}")

engine_kwargs = {
    "echo": settings.environment == "development",
    "future": True,
    "pool_pre_ping": True,
}
# Pool sizing only applies to server databases; SQLite uses its own pool classes
if not database_url.startswith("sqlite"):
    engine_kwargs.update(
        pool_recycle=3600,
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
    )

engine = create_async_engine(database_url, **engine_kwargs)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)

# Base class for models
Base = declarative_base()


async def get_db() -> AsyncSession:
    """Dependency for getting database session"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def create_all() -> None:
    """Create all tables (development and CLI use; production uses Alembic)"""
    # Models must be imported so their tables are registered on Base.metadata
    from seopanel.db import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
