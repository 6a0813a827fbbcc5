"""Main FastAPI application"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError

from seopanel import __version__
from seopanel.core.config import settings
from seopanel.core.redis import redis_client
from seopanel.api.routes import (
    seo_pages_router,
    redirects_router,
    audit_logs_router,
    performance_router,
    sitemap_router,
)
from seopanel.api.exception_handlers import (
    seo_error_handler,
    validation_exception_handler,
    integrity_error_handler,
)
from seopanel.exceptions import SEOError

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    if settings.cache_backend == "redis":
        await redis_client.connect()
    logger.info(f"SEO panel started for site {settings.default_site_id} ({settings.cache_backend} cache)")

    # Note: In production, use Alembic migrations instead of create_all

    yield

    # Shutdown
    if settings.cache_backend == "redis":
        await redis_client.disconnect()


app = FastAPI(
    title="SEO Panel - Page Metadata Administration",
    description="Manages per-page SEO overrides, slugs and redirects for a fixed page catalog",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
app.add_exception_handler(SEOError, seo_error_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(IntegrityError, integrity_error_handler)

# Include routers
app.include_router(seo_pages_router, prefix="/api/v1")
app.include_router(redirects_router, prefix="/api/v1")
app.include_router(audit_logs_router, prefix="/api/v1")
app.include_router(performance_router, prefix="/api/v1")
app.include_router(sitemap_router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "name": "SEO Panel",
        "version": __version__,
        "status": "operational",
    }


@app.get("/health")
async def health():
    """Health check endpoint, including the listing cache backend"""
    status = {"status": "healthy", "cache": settings.cache_backend}
    if settings.cache_backend == "redis":
        status["redis"] = await redis_client.ping()
    return status
