"""Pytest configuration and shared fixtures"""
import pytest
import os
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from seopanel.core.security.rbac import Actor, Role
from seopanel.seo.cache import InMemorySEOCache
from seopanel.seo.catalog import default_catalog
from seopanel.seo.performance import PerformanceMonitor
from seopanel.seo.redirect_manager import RedirectManager
from seopanel.services.seo_page_service import SEOReconciliationService

# Test database URL (use in-memory SQLite for unit tests)
TEST_DATABASE_URL = os.getenv(
    "TEST_DATABASE_URL",
    "sqlite+aiosqlite:///:memory:"
)


def make_test_engine():
    """Async engine sharing one in-memory SQLite connection"""
    return create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False} if "sqlite" in TEST_DATABASE_URL else {},
        poolclass=StaticPool if "sqlite" in TEST_DATABASE_URL else None,
    )


@pytest.fixture
async def test_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create test database session"""
    from seopanel.core.database import Base
    from seopanel.db import models  # noqa: F401

    engine = make_test_engine()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(engine, expire_on_commit=False)

    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def site_id():
    """Site identifier used by tests"""
    return "test-site"


@pytest.fixture
def owner_actor():
    return Actor(id="owner-1", role=Role.OWNER)


@pytest.fixture
def admin_actor():
    return Actor(id="admin-1", role=Role.ADMIN)


@pytest.fixture
def editor_actor():
    return Actor(id="editor-1", role=Role.EDITOR)


@pytest.fixture
def viewer_actor():
    return Actor(id="viewer-1", role=Role.VIEWER)


@pytest.fixture
def catalog():
    """The predefined page catalog"""
    return default_catalog()


@pytest.fixture
def memory_cache():
    """Fresh in-memory listing cache"""
    return InMemorySEOCache(ttl_seconds=1800)


@pytest.fixture
def monitor():
    """Fresh performance monitor"""
    return PerformanceMonitor(history_size=100)


@pytest.fixture
def redirect_manager():
    return RedirectManager(max_chain_depth=5, delete_limit=50)


@pytest.fixture
def seo_service(catalog, memory_cache, redirect_manager, monitor):
    """Reconciliation service wired to test collaborators"""
    return SEOReconciliationService(
        catalog=catalog,
        cache=memory_cache,
        redirect_manager=redirect_manager,
        monitor=monitor,
    )
