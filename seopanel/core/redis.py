"""
Redis connection behind the shared listing cache.

When `cache_backend` is "redis" every process serving the panel reads and
writes composed listings under `{cache_key_prefix}:list:{site_id}:{hash}` on
this connection, so a write in one process invalidates listings for all.
"""
import logging
from typing import Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from seopanel.core.config import settings

logger = logging.getLogger(__name__)


class ListingCacheRedis:
    """Process-wide Redis connection for listing cache keys"""
    _instance = None
    _client: Optional[aioredis.Redis] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    async def connect(self) -> aioredis.Redis:
        if self._client is None:
            # Cached listings are JSON text
            self._client = aioredis.from_url(
                settings.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            logger.info(f"Listing cache connected to {settings.redis_url} (prefix {settings.cache_key_prefix})")
        return self._client

    async def disconnect(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("Listing cache connection closed")

    async def get_client(self) -> aioredis.Redis:
        """Client used by RedisSEOCache; connects lazily"""
        if self._client is None:
            await self.connect()
        return self._client

    async def ping(self) -> bool:
        """Whether the cache server answers; never raises on connection errors"""
        try:
            client = await self.get_client()
            return bool(await client.ping())
        except RedisError as e:
            logger.warning(f"Listing cache ping failed: {e}")
            return False


redis_client = ListingCacheRedis()
