"""Sitemap entry generation from composed page views"""
import math
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

from seopanel.db.enums import PageCategory
from seopanel.types import ComposedPage, SitemapEntry

MAX_ENTRIES_PER_SITEMAP = 50000

# (change frequency, priority) per page category
CATEGORY_SETTINGS: Dict[str, Tuple[str, float]] = {
    PageCategory.MAIN.value: ("daily", 1.0),
    PageCategory.SERVICES.value: ("weekly", 0.8),
    PageCategory.BLOG.value: ("weekly", 0.7),
    PageCategory.ABOUT.value: ("monthly", 0.6),
    PageCategory.CONTACT.value: ("monthly", 0.6),
    PageCategory.OTHER.value: ("monthly", 0.4),
}


def is_indexable(page: ComposedPage) -> bool:
    return "noindex" not in (page["robots"] or "").lower()


class SitemapGenerator:
    """Maps composed pages to sitemap entries"""

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")

    def url_for(self, path: str) -> str:
        return self.base_url if path == "/" else f"{self.base_url}{path}"

    def entry_for(self, page: ComposedPage, now: Optional[datetime] = None) -> SitemapEntry:
        frequency, priority = CATEGORY_SETTINGS.get(
            page["page_category"], CATEGORY_SETTINGS[PageCategory.OTHER.value]
        )
        if page["path"] == "/":
            priority = 1.0
        last_modified = page["updated_at"] or (now or datetime.now(timezone.utc)).isoformat()
        return {
            "url": self.url_for(page["path"]),
            "last_modified": last_modified,
            "change_frequency": frequency,
            "priority": priority,
        }

    def generate_entries(self, pages: Iterable[ComposedPage]) -> List[SitemapEntry]:
        """Entries for every indexable page, in path order"""
        now = datetime.now(timezone.utc)
        return [self.entry_for(page, now) for page in pages if is_indexable(page)]

    def get_stats(self, pages: Iterable[ComposedPage]) -> Dict[str, Any]:
        pages = list(pages)
        entries = self.generate_entries(pages)

        by_category: Dict[str, int] = {}
        for page in pages:
            if is_indexable(page):
                by_category[page["page_category"]] = by_category.get(page["page_category"], 0) + 1

        by_priority: Dict[str, int] = {}
        for entry in entries:
            key = f"{entry['priority']:.1f}"
            by_priority[key] = by_priority.get(key, 0) + 1

        return {
            "total_pages": len(pages),
            "total_entries": len(entries),
            "excluded_noindex": len(pages) - len(entries),
            "custom_pages": sum(1 for page in pages if page["is_custom"]),
            "by_category": by_category,
            "by_priority": by_priority,
        }

    def sitemap_info(self, total_entries: int) -> Dict[str, Any]:
        """Whether the entries need splitting across several sitemap files"""
        count = max(1, math.ceil(total_entries / MAX_ENTRIES_PER_SITEMAP))
        needs_index = total_entries > MAX_ENTRIES_PER_SITEMAP
        return {
            "total_entries": total_entries,
            "needs_sitemap_index": needs_index,
            "sitemap_count": count,
            "sitemap_urls": (
                [f"{self.base_url}/sitemap-{i + 1}.xml" for i in range(count)]
                if needs_index else [f"{self.base_url}/sitemap.xml"]
            ),
            "index_url": f"{self.base_url}/sitemap.xml" if needs_index else None,
        }
