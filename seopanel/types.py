"""Type definitions for seopanel - TypedDict classes for type safety"""
from typing import TypedDict, Optional, List, Dict, Any


# ============================================================================
# Page Views
# ============================================================================

class OpenGraph(TypedDict, total=False):
    """Open Graph overrides for a page"""
    title: Optional[str]
    description: Optional[str]
    image: Optional[str]
    type: Optional[str]


class ComposedPage(TypedDict):
    """Catalog defaults overlaid with a page's override record"""
    path: str
    slug: str
    meta_title: str
    meta_description: str
    robots: str
    page_category: str
    open_graph: Dict[str, Any]
    is_custom: bool
    has_custom_seo: bool
    default_title: str
    default_description: str
    default_slug: str
    created_at: Optional[str]
    updated_at: Optional[str]


class Pagination(TypedDict):
    """Pagination block of a listing"""
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class PageSummary(TypedDict):
    """Catalog-wide counts returned with every listing"""
    total_predefined: int
    total_custom: int
    total_default: int


class PageListing(TypedDict):
    """Result of ListPages"""
    pages: List[ComposedPage]
    pagination: Pagination
    summary: PageSummary


# ============================================================================
# Write Results
# ============================================================================

class FieldChange(TypedDict):
    """Single field difference recorded in the audit log"""
    field: str
    old_value: Any
    new_value: Any


class UpsertResult(TypedDict, total=False):
    """Result of UpsertPage"""
    page: ComposedPage
    created: bool
    old_slug: Optional[str]
    new_slug: Optional[str]
    redirect_created: bool
    redirect_error: Optional[str]
    redirect_error_code: Optional[str]
    warnings: List[str]


class BulkItemResult(TypedDict, total=False):
    """Per-path outcome of a bulk operation"""
    path: str
    success: bool
    error: Optional[str]
    error_code: Optional[str]
    had_custom_data: bool
    redirect_created: bool


class BulkResult(TypedDict, total=False):
    """Result of BulkApply"""
    operation: str
    results: List[BulkItemResult]
    total: int
    successful: int
    failed: int
    data: Any
    format: str


# ============================================================================
# Redirect Types
# ============================================================================

class RedirectCheckResult(TypedDict, total=False):
    """Result of a redirect chain/loop check"""
    valid: bool
    error: Optional[str]
    error_code: Optional[str]
    chain_length: int


class RedirectCreationResult(TypedDict, total=False):
    """Result of CreateRedirectSafely"""
    success: bool
    redirect: Optional[Dict[str, Any]]
    error: Optional[str]
    error_code: Optional[str]
    chain_length: int


# ============================================================================
# Telemetry Types
# ============================================================================

class CacheStats(TypedDict):
    """Cache counters"""
    backend: str
    entries: int
    hits: int
    misses: int
    hit_rate: float


class SitemapEntry(TypedDict):
    """One sitemap URL entry"""
    url: str
    last_modified: str
    change_frequency: str
    priority: float
