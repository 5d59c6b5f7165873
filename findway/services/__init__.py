"""
Services module for the FindWay Assessment Engine.
"""

from findway.services.cache import InMemoryCache, SessionCache, get_cache, reset_cache
from findway.services.redis_cache import RedisCache
from findway.services.session_store import LastSession, LastSessionStore

__all__ = [
    # Session cache
    "InMemoryCache",
    "RedisCache",
    "SessionCache",
    "get_cache",
    "reset_cache",

    # Last session records
    "LastSession",
    "LastSessionStore",
]
