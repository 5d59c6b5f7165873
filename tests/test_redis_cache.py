"""
Session Cache Tests - FindWay Assessment Engine
tests/test_redis_cache.py

Tests for the Redis-backed session cache, the in-memory fallback and the
cache singleton's graceful degradation.
"""
import pytest
from unittest.mock import patch, MagicMock

import redis

from findway.models.profile import UserProfile
from findway.services.cache import InMemoryCache, get_cache, reset_cache
from findway.services.redis_cache import RedisCache, serialize


@pytest.fixture(autouse=True)
def fresh_singleton():
    reset_cache()
    yield
    reset_cache()


class TestSerialize:
    def test_model_is_camel_case_json(self):
        payload = serialize(UserProfile(name="Ravi", skills=["go"]))
        assert '"name":"Ravi"' in payload
        assert '"skills":["go"]' in payload

    def test_string_passes_through(self):
        assert serialize("not json at all") == "not json at all"


class TestRedisCache:
    """Tests for the RedisCache class."""

    def test_redis_cache_init(self):
        """Test RedisCache initialization."""
        with patch('findway.services.redis_cache.redis.from_url') as mock_from_url:
            cache = RedisCache(url="redis://cache:6379/1", ttl_seconds=60, prefix="fw")
            mock_from_url.assert_called_once_with(
                "redis://cache:6379/1",
                decode_responses=True,
                socket_connect_timeout=5,
            )
            assert cache.client is mock_from_url.return_value
            assert cache.ttl_seconds == 60
            assert cache.prefix == "fw"

    def test_put_writes_with_ttl(self):
        """Every write carries the session TTL."""
        with patch('findway.services.redis_cache.redis.from_url') as mock_from_url:
            mock_client = MagicMock()
            mock_from_url.return_value = mock_client

            cache = RedisCache(ttl_seconds=300)
            profile = UserProfile(name="Ravi")
            cache.put("findway:s1:profile", profile)

            mock_client.setex.assert_called_once_with(
                "findway:s1:profile",
                300,
                profile.model_dump_json(by_alias=True),
            )

    def test_get_returns_raw_record(self):
        with patch('findway.services.redis_cache.redis.from_url') as mock_from_url:
            mock_client = MagicMock()
            mock_client.get.return_value = '{"name":"Ravi"}'
            mock_from_url.return_value = mock_client

            cache = RedisCache()
            assert cache.get("findway:s1:profile") == '{"name":"Ravi"}'

    def test_get_miss(self):
        """Test cache miss returns None."""
        with patch('findway.services.redis_cache.redis.from_url') as mock_from_url:
            mock_client = MagicMock()
            mock_client.get.return_value = None
            mock_from_url.return_value = mock_client

            assert RedisCache().get("findway:missing") is None

    def test_delete(self):
        with patch('findway.services.redis_cache.redis.from_url') as mock_from_url:
            mock_client = MagicMock()
            mock_from_url.return_value = mock_client

            RedisCache().delete("findway:s1:report")
            mock_client.delete.assert_called_once_with("findway:s1:report")

    def test_clear_scans_prefix(self):
        """clear() only removes keys under the cache prefix."""
        with patch('findway.services.redis_cache.redis.from_url') as mock_from_url:
            mock_client = MagicMock()
            mock_client.scan_iter.return_value = iter(["fw:a:profile", "fw:a:scores"])
            mock_from_url.return_value = mock_client

            RedisCache(prefix="fw").clear()

            mock_client.scan_iter.assert_called_once_with(match="fw:*")
            assert mock_client.delete.call_count == 2


class TestInMemoryCache:
    def test_put_get_delete(self):
        cache = InMemoryCache()
        cache.put("k", UserProfile(name="Ravi"))
        assert "k" in cache
        assert '"name":"Ravi"' in cache.get("k")

        cache.delete("k")
        assert cache.get("k") is None
        cache.delete("k")  # deleting twice is fine

    def test_put_overwrites(self):
        cache = InMemoryCache()
        cache.put("k", "first")
        cache.put("k", "second")
        assert cache.get("k") == "second"
        assert len(cache) == 1

    def test_clear(self):
        cache = InMemoryCache()
        cache.put("a", "1")
        cache.put("b", "2")
        cache.clear()
        assert len(cache) == 0


class TestCacheSingleton:
    def test_uses_redis_when_reachable(self):
        with patch('findway.services.redis_cache.redis.from_url') as mock_from_url:
            mock_from_url.return_value = MagicMock()
            cache = get_cache()
            assert isinstance(cache, RedisCache)
            assert get_cache() is cache

    def test_falls_back_to_memory_when_redis_down(self):
        """Graceful degradation when Redis refuses connections."""
        with patch('findway.services.redis_cache.redis.from_url') as mock_from_url:
            mock_client = MagicMock()
            mock_client.ping.side_effect = redis.ConnectionError("Connection refused")
            mock_from_url.return_value = mock_client

            assert isinstance(get_cache(), InMemoryCache)

    def test_reset_cache(self):
        with patch('findway.services.redis_cache.redis.from_url') as mock_from_url:
            mock_from_url.return_value = MagicMock()
            first = get_cache()
            reset_cache()
            assert get_cache() is not first

    def test_falls_back_to_memory_on_bad_url(self):
        """A malformed REDIS_URL degrades instead of failing the request."""
        with patch('findway.services.redis_cache.redis.from_url') as mock_from_url:
            mock_from_url.side_effect = ValueError("Redis URL must specify one of the following schemes")

            assert isinstance(get_cache(), InMemoryCache)
