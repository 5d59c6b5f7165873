import redis
from typing import Optional, Union
from pydantic import BaseModel
from findway.config import get_settings


def serialize(value: Union[BaseModel, str]) -> str:
    """Records are stored as camelCase JSON; strings pass through untouched."""
    if isinstance(value, BaseModel):
        return value.model_dump_json(by_alias=True)
    return value


class RedisCache:
    """Session cache backed by Redis. Every key written gets the session TTL."""

    def __init__(self, url: Optional[str] = None, ttl_seconds: Optional[int] = None,
                 prefix: Optional[str] = None):
        settings = get_settings()
        self.client = redis.from_url(
            url or settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
        )
        self.ttl_seconds = ttl_seconds or settings.CACHE_TTL_SESSION
        self.prefix = prefix or settings.SESSION_KEY_PREFIX

    def get(self, key: str) -> Optional[str]:
        """Get the raw serialized record, or None when absent."""
        return self.client.get(key)

    def put(self, key: str, value: Union[BaseModel, str]) -> None:
        """Overwrite the whole record with TTL."""
        self.client.setex(key, self.ttl_seconds, serialize(value))

    def delete(self, key: str) -> None:
        """Invalidate single cache entry."""
        self.client.delete(key)

    def delete_pattern(self, pattern: str) -> None:
        """Invalidate all keys matching pattern."""
        for key in self.client.scan_iter(match=pattern):
            self.client.delete(key)

    def clear(self) -> None:
        """Drop every record under this cache's prefix."""
        self.delete_pattern(f"{self.prefix}:*")

    def ping(self) -> bool:
        return bool(self.client.ping())
