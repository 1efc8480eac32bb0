"""
structcache.cache - Async cache clients with simulated structures, dood!

Core Components:
- MemcachedWrapper: Memcached client with simulated hashes and lists
- RedisWrapper: Owner of a redis.asyncio client (native hashes and lists)
- ScalarCacheClient: Validated get/set/delete over a flat backend
- HashEngine, ListEngine: Structured value simulation
- DictBackend, MemcachedBackend: Flat backends

Example Usage:
    >>> from structcache.cache import ListSetOptions, MemcachedWrapper
    >>>
    >>> async with MemcachedWrapper("127.0.0.1:11211") as cache:
    ...     await cache.hashSet("user:123", "level", 99, ttl=3600)
    ...     await cache.listSet("user:123:log", "login", ttl=3600, options=ListSetOptions(push=True))
    ...     level = await cache.hashGet("user:123", "level")
"""

from .backends import AbstractScalarBackend, DictBackend, MemcachedBackend
from .client import ScalarCacheClient
from .exceptions import (
    CacheBackendError,
    CacheConfigError,
    CacheError,
    DecodeError,
    DeleteError,
    InvalidArgumentError,
    InvalidFieldError,
    InvalidKeyError,
    RetrievalError,
    StoreError,
)
from .hash_engine import HashEngine
from .keys import validateKey
from .list_engine import ListEngine
from .memcached_wrapper import MemcachedWrapper
from .redis_wrapper import RedisWrapper
from .types import (
    DeleteResult,
    HashDelOptions,
    ListDelOptions,
    ListGetOptions,
    ListSetOptions,
    MemcachedConfig,
    RedisConfig,
    ValueConverter,
)
from .value_converter import JsonValueConverter, StringValueConverter

__all__ = [
    # Wrappers
    "MemcachedWrapper",
    "RedisWrapper",
    # Core
    "ScalarCacheClient",
    "HashEngine",
    "ListEngine",
    "validateKey",
    # Backends
    "AbstractScalarBackend",
    "DictBackend",
    "MemcachedBackend",
    # Types
    "DeleteResult",
    "HashDelOptions",
    "ListSetOptions",
    "ListGetOptions",
    "ListDelOptions",
    "MemcachedConfig",
    "RedisConfig",
    "ValueConverter",
    # Value converters
    "JsonValueConverter",
    "StringValueConverter",
    # Exceptions
    "CacheError",
    "CacheBackendError",
    "CacheConfigError",
    "DecodeError",
    "DeleteError",
    "InvalidArgumentError",
    "InvalidFieldError",
    "InvalidKeyError",
    "RetrievalError",
    "StoreError",
]
