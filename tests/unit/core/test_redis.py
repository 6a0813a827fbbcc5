"""Unit tests for the listing cache Redis connection"""
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from seopanel.core.redis import ListingCacheRedis, redis_client


class FakeRedis:
    def __init__(self, healthy=True):
        self.healthy = healthy
        self.closed = False

    async def ping(self):
        if not self.healthy:
            raise RedisConnectionError("Connection refused")
        return True

    async def aclose(self):
        self.closed = True


@pytest.fixture
def fake_connection():
    """Swap a fake client into the shared connection and restore it afterwards"""
    previous = redis_client._client
    redis_client._client = FakeRedis()
    yield redis_client
    redis_client._client = previous


class TestListingCacheRedis:
    """Tests for the shared Redis connection"""

    def test_singleton(self):
        assert ListingCacheRedis() is redis_client

    @pytest.mark.asyncio
    async def test_get_client_reuses_connection(self, fake_connection):
        client = await fake_connection.get_client()
        assert client is await fake_connection.get_client()

    @pytest.mark.asyncio
    async def test_ping_healthy(self, fake_connection):
        assert await fake_connection.ping() is True

    @pytest.mark.asyncio
    async def test_ping_reports_unreachable_server(self, fake_connection):
        """A connection error is reported as an unhealthy cache"""
        fake_connection._client.healthy = False
        assert await fake_connection.ping() is False

    @pytest.mark.asyncio
    async def test_disconnect_closes_client(self, fake_connection):
        client = fake_connection._client
        await fake_connection.disconnect()
        assert client.closed is True
        assert fake_connection._client is None
