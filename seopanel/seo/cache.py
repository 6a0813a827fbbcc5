"""Cache layer for composed SEO listings.

Entries are keyed by (site_id, query_hash). Any write to a site's SEO records
invalidates every entry of that site before the write returns.
"""
import json
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Tuple

from redis.exceptions import RedisError

from seopanel.core.config import settings
from seopanel.types import CacheStats

logger = logging.getLogger(__name__)


class SEOCache(ABC):
    """Swappable cache interface used by the reconciliation service"""

    backend = "abstract"

    def __init__(self, ttl_seconds: Optional[int] = None):
        self.ttl_seconds = ttl_seconds or settings.seo_cache_ttl_seconds
        self.hits = 0
        self.misses = 0

    @abstractmethod
    async def get(self, site_id: str, query_hash: str) -> Optional[Any]:
        """Return the cached value or None on miss/expiry"""

    @abstractmethod
    async def put(self, site_id: str, query_hash: str, value: Any, ttl: Optional[int] = None) -> None:
        """Store a value for ttl seconds (default: configured TTL)"""

    @abstractmethod
    async def invalidate_site(self, site_id: str) -> int:
        """Drop every entry of a site; returns the number removed"""

    @abstractmethod
    async def clear_all(self) -> int:
        """Drop every entry; returns the number removed"""

    @abstractmethod
    async def count(self) -> int:
        """Number of live entries"""

    def _record(self, hit: bool) -> None:
        if hit:
            self.hits += 1
        else:
            self.misses += 1

    async def stats(self) -> CacheStats:
        lookups = self.hits + self.misses
        return {
            "backend": self.backend,
            "entries": await self.count(),
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": round(self.hits / lookups, 4) if lookups else 0.0,
        }


class InMemorySEOCache(SEOCache):
    """Per-process TTL map; suitable for a single worker and for tests"""

    backend = "memory"

    def __init__(self, ttl_seconds: Optional[int] = None, clock: Callable[[], float] = time.monotonic):
        super().__init__(ttl_seconds)
        self._clock = clock
        self._entries: Dict[Tuple[str, str], Tuple[float, str]] = {}

    async def get(self, site_id: str, query_hash: str) -> Optional[Any]:
        key = (site_id, query_hash)
        entry = self._entries.get(key)
        if entry is None:
            self._record(False)
            return None

        expires_at, payload = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            self._record(False)
            return None

        self._record(True)
        # Stored serialized so callers never share mutable state with the cache
        return json.loads(payload)

    async def put(self, site_id: str, query_hash: str, value: Any, ttl: Optional[int] = None) -> None:
        expires_at = self._clock() + (ttl or self.ttl_seconds)
        self._entries[(site_id, query_hash)] = (expires_at, json.dumps(value))

    async def invalidate_site(self, site_id: str) -> int:
        keys = [key for key in self._entries if key[0] == site_id]
        for key in keys:
            del self._entries[key]
        logger.debug(f"Invalidated {len(keys)} cache entries for site {site_id}")
        return len(keys)

    async def clear_all(self) -> int:
        removed = len(self._entries)
        self._entries.clear()
        return removed

    async def count(self) -> int:
        now = self._clock()
        return sum(1 for expires_at, _ in self._entries.values() if expires_at > now)


class RedisSEOCache(SEOCache):
    """Shared cache backed by Redis keys with native expiry"""

    backend = "redis"

    def __init__(self, client_factory, ttl_seconds: Optional[int] = None, prefix: Optional[str] = None):
        super().__init__(ttl_seconds)
        self._client_factory = client_factory
        self.prefix = prefix or settings.cache_key_prefix

    def _key(self, site_id: str, query_hash: str) -> str:
        return f"{self.prefix}:list:{site_id}:{query_hash}"

    def _site_pattern(self, site_id: str) -> str:
        return f"{self.prefix}:list:{site_id}:*"

    async def _delete_matching(self, pattern: str) -> int:
        client = await self._client_factory()
        removed = 0
        async for key in client.scan_iter(match=pattern):
            removed += await client.delete(key)
        return removed

    async def get(self, site_id: str, query_hash: str) -> Optional[Any]:
        try:
            client = await self._client_factory()
            payload = await client.get(self._key(site_id, query_hash))
        except RedisError as e:
            # A failed lookup degrades to a miss
            logger.warning(f"Cache read failed for site {site_id}: {e}")
            self._record(False)
            return None

        if payload is None:
            self._record(False)
            return None
        self._record(True)
        return json.loads(payload)

    async def put(self, site_id: str, query_hash: str, value: Any, ttl: Optional[int] = None) -> None:
        try:
            client = await self._client_factory()
            await client.setex(self._key(site_id, query_hash), ttl or self.ttl_seconds, json.dumps(value))
        except RedisError as e:
            logger.warning(f"Cache write failed for site {site_id}: {e}")

    async def invalidate_site(self, site_id: str) -> int:
        try:
            removed = await self._delete_matching(self._site_pattern(site_id))
        except RedisError:
            logger.exception(f"Cache invalidation failed for site {site_id}")
            raise
        logger.debug(f"Invalidated {removed} cache entries for site {site_id}")
        return removed

    async def clear_all(self) -> int:
        return await self._delete_matching(f"{self.prefix}:list:*")

    async def count(self) -> int:
        client = await self._client_factory()
        total = 0
        async for _ in client.scan_iter(match=f"{self.prefix}:list:*"):
            total += 1
        return total


_cache: Optional[SEOCache] = None


def build_cache(backend: Optional[str] = None) -> SEOCache:
    """Create a cache for the configured backend"""
    backend = (backend or settings.cache_backend).lower()
    if backend == "redis":
        from seopanel.core.redis import redis_client
        return RedisSEOCache(redis_client.get_client)
    if backend == "memory":
        return InMemorySEOCache()
    raise ValueError(f"Unknown cache backend: {backend}")


def get_cache() -> SEOCache:
    """Process-wide cache instance"""
    global _cache
    if _cache is None:
        _cache = build_cache()
    return _cache
