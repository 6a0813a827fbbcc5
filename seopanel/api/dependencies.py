"""FastAPI dependency injection for seopanel services"""
from fastapi import Depends

from seopanel.core.config import settings
from seopanel.seo.cache import SEOCache, get_cache
from seopanel.seo.catalog import PageCatalog, default_catalog
from seopanel.seo.performance import PerformanceMonitor, performance_monitor
from seopanel.seo.redirect_manager import RedirectManager
from seopanel.services.seo_page_service import SEOReconciliationService


def get_site_id() -> str:
    """Site whose SEO data the panel manages"""
    return settings.default_site_id


def get_catalog() -> PageCatalog:
    """Get the page catalog"""
    return default_catalog()


def get_seo_cache() -> SEOCache:
    """Get the listing cache for the configured backend"""
    return get_cache()


def get_performance_monitor() -> PerformanceMonitor:
    """Get the process performance monitor"""
    return performance_monitor


def get_redirect_manager() -> RedirectManager:
    """Get redirect manager instance"""
    return RedirectManager()


def get_seo_service(
    catalog: PageCatalog = Depends(get_catalog),
    cache: SEOCache = Depends(get_seo_cache),
    redirect_manager: RedirectManager = Depends(get_redirect_manager),
    monitor: PerformanceMonitor = Depends(get_performance_monitor),
) -> SEOReconciliationService:
    """Get reconciliation service instance"""
    return SEOReconciliationService(
        catalog=catalog,
        cache=cache,
        redirect_manager=redirect_manager,
        monitor=monitor,
    )
