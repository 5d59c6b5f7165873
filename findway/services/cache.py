"""
Session Cache Singleton - FindWay Assessment Engine
findway/services/cache.py

Defines the SessionCache contract and provides a singleton instance.
Falls back to an in-process cache when Redis is unavailable.
"""
import logging
import threading
from typing import Dict, Optional, Protocol, Union

import redis
from pydantic import BaseModel

from findway.services.redis_cache import RedisCache, serialize

logger = logging.getLogger(__name__)


class SessionCache(Protocol):
    """Key-value store holding opaque serialized records."""

    def put(self, key: str, value: Union[BaseModel, str]) -> None: ...

    def get(self, key: str) -> Optional[str]: ...

    def delete(self, key: str) -> None: ...

    def clear(self) -> None: ...


class InMemoryCache:
    """Process-local SessionCache. Used in tests and when Redis is down."""

    def __init__(self):
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()

    def put(self, key: str, value: Union[BaseModel, str]) -> None:
        with self._lock:
            self._data[key] = serialize(value)

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


# Singleton instance
_cache: Optional[SessionCache] = None


def get_cache() -> SessionCache:
    """
    Get or create the session cache.

    Returns:
        RedisCache if Redis answers a ping, otherwise an InMemoryCache.

    Note:
        The in-memory fallback keeps the assessment flow working without
        Redis, but last sessions then do not survive a process restart.
    """
    global _cache
    if _cache is None:
        try:
            cache = RedisCache()
            cache.client.ping()  # Test connection
            _cache = cache
        except (redis.RedisError, ConnectionError, ValueError) as e:
            logger.warning("Redis unavailable (%s); using in-memory session cache", e)
            _cache = InMemoryCache()
    return _cache


def reset_cache() -> None:
    """
    Reset the cache singleton.

    Useful for testing or when Redis connection needs to be re-established.
    """
    global _cache
    _cache = None
