"""Overlay of override records onto catalog defaults"""
import hashlib
import json
import math
from typing import Any, Dict, Iterable, List, Mapping, Optional

from seopanel.db.enums import DEFAULT_ROBOTS
from seopanel.db.models import SEOPage
from seopanel.seo.catalog import PageCatalog, PredefinedPage
from seopanel.types import ComposedPage, PageSummary, Pagination


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _pick(override_value: Any, default_value: Any) -> Any:
    return default_value if override_value is None else override_value


def merge_page(defaults: PredefinedPage, override: Optional[SEOPage] = None) -> ComposedPage:
    """
    Produce the fully-resolved view of a page.

    Override fields win one by one; a missing override yields the pure
    catalog defaults with `is_custom` False.

    Args:
        defaults: Catalog entry for the page
        override: Persisted override record, if any

    Returns:
        Composed page view
    """
    if override is None:
        return {
            "path": defaults.path,
            "slug": defaults.default_slug,
            "meta_title": defaults.default_title,
            "meta_description": defaults.default_description,
            "robots": DEFAULT_ROBOTS,
            "page_category": defaults.category.value,
            "open_graph": {},
            "is_custom": False,
            "has_custom_seo": False,
            "default_title": defaults.default_title,
            "default_description": defaults.default_description,
            "default_slug": defaults.default_slug,
            "created_at": None,
            "updated_at": None,
        }

    return {
        "path": defaults.path,
        "slug": _pick(override.slug, defaults.default_slug),
        "meta_title": _pick(override.meta_title, defaults.default_title),
        "meta_description": _pick(override.meta_description, defaults.default_description),
        "robots": _pick(override.robots, DEFAULT_ROBOTS),
        "page_category": _pick(override.page_category, defaults.category.value),
        "open_graph": dict(override.open_graph or {}),
        "is_custom": True,
        "has_custom_seo": True,
        "default_title": defaults.default_title,
        "default_description": defaults.default_description,
        "default_slug": defaults.default_slug,
        "created_at": _iso(override.created_at),
        "updated_at": _iso(override.updated_at),
    }


def default_fields(defaults: PredefinedPage) -> Dict[str, Any]:
    """Override-able field values a page has when it has no record"""
    return {
        "slug": defaults.default_slug,
        "meta_title": defaults.default_title,
        "meta_description": defaults.default_description,
        "robots": DEFAULT_ROBOTS,
        "page_category": defaults.category.value,
        "open_graph": {},
    }


def compose_catalog(catalog: PageCatalog, overrides: Mapping[str, SEOPage]) -> List[ComposedPage]:
    """Composed view of every catalog page, sorted by path"""
    pages = [merge_page(page, overrides.get(page.path)) for page in catalog]
    pages.sort(key=lambda page: page["path"])
    return pages


def filter_pages(
    pages: Iterable[ComposedPage],
    search: Optional[str] = None,
    category: Optional[str] = None,
    is_custom: Optional[bool] = None,
) -> List[ComposedPage]:
    """Apply search, then category, then custom/default filtering"""
    result = list(pages)

    if search:
        needle = search.lower()
        result = [
            page for page in result
            if needle in page["path"].lower()
            or needle in page["meta_title"].lower()
            or needle in page["meta_description"].lower()
            or needle in page["slug"].lower()
        ]

    if category:
        result = [page for page in result if page["page_category"] == category]

    if is_custom is not None:
        result = [page for page in result if page["is_custom"] == is_custom]

    return result


def paginate(items: List[Any], page: int, limit: int) -> tuple:
    """Slice a list and build its pagination block"""
    total = len(items)
    total_pages = math.ceil(total / limit) if total else 0
    start = (page - 1) * limit
    pagination: Pagination = {
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": total_pages,
        "has_next": page < total_pages,
        "has_prev": page > 1,
    }
    return items[start:start + limit], pagination


def summarize(pages: Iterable[ComposedPage]) -> PageSummary:
    pages = list(pages)
    custom = sum(1 for page in pages if page["is_custom"])
    return {
        "total_predefined": len(pages),
        "total_custom": custom,
        "total_default": len(pages) - custom,
    }


def normalize_query(
    search: Optional[str] = None,
    category: Optional[str] = None,
    is_custom: Optional[bool] = None,
    page: int = 1,
    limit: int = 20,
) -> Dict[str, Any]:
    """Canonical form of listing parameters used for cache keys"""
    return {
        "search": (search or "").strip().lower() or None,
        "category": category or None,
        "is_custom": is_custom,
        "page": page,
        "limit": limit,
    }


def query_fingerprint(params: Mapping[str, Any]) -> str:
    """Stable hash of normalized listing parameters"""
    encoded = json.dumps(dict(params), sort_keys=True, default=str)
    return hashlib.sha256(encoded.encode("utf-8")).hexdigest()[:32]
