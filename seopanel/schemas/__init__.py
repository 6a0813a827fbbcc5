"""Pydantic schemas for API requests"""
from seopanel.schemas.seo_pages import (
    OpenGraphData,
    SEOPageFields,
    SEOPageUpsert,
    ImportItem,
    BulkOperationRequest,
)
from seopanel.schemas.redirects import RedirectCreate, RedirectDelete
from seopanel.schemas.admin import PerformanceAction, SitemapRequest

__all__ = [
    # SEO pages
    "OpenGraphData",
    "SEOPageFields",
    "SEOPageUpsert",
    "ImportItem",
    "BulkOperationRequest",
    # Redirects
    "RedirectCreate",
    "RedirectDelete",
    # Administration
    "PerformanceAction",
    "SitemapRequest",
]
