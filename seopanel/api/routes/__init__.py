"""API route modules"""
from seopanel.api.routes.seo_pages import router as seo_pages_router
from seopanel.api.routes.redirects import router as redirects_router
from seopanel.api.routes.audit_logs import router as audit_logs_router
from seopanel.api.routes.performance import router as performance_router
from seopanel.api.routes.sitemap import router as sitemap_router

__all__ = [
    "seo_pages_router", "redirects_router", "audit_logs_router", "performance_router", "sitemap_router",
]
