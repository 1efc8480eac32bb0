"""
structcache - Unified async client for Memcached and Redis.

Memcached gets hashes and lists simulated on top of plain string values,
Redis is used natively. See structcache.cache for the client API.
"""

from .cache import MemcachedWrapper, RedisWrapper

__version__ = "0.1.0"

__all__ = [
    "MemcachedWrapper",
    "RedisWrapper",
]
