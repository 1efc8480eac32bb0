"""
Memcached wrapper with simulated hashes and lists, dood!

Memcached only stores flat strings with expiration. This wrapper exposes the
plain get/set/delete operations and, on top of them, hash and list operations
which are simulated by storing the whole structure as JSON under one key.

Concurrency contract: structured mutations are read-modify-write cycles
without locking. Concurrent writers to the same key lose updates (the last
write wins), so use one writer per structured key.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from .backends.abstract import AbstractScalarBackend
from .backends.memcached import MemcachedBackend
from .client import ScalarCacheClient
from .exceptions import CacheConfigError
from .hash_engine import HashEngine
from .list_engine import ListEngine
from .types import (
    DEFAULT_MEMCACHED_SERVER,
    MAX_KEY_LENGTH,
    DeleteResult,
    HashDelOptions,
    ListDelOptions,
    ListGetOptions,
    ListSetOptions,
    MemcachedConfig,
    ValueConverter,
)

logger = logging.getLogger(__name__)

DEFAULT_OPTIONS: Dict[str, Any] = {"timeout": 0.3}


class MemcachedWrapper:
    """
    Async Memcached client with hash and list simulation.

    Args:
        connectionArgs: "host:port" string or list of them. Defaults to
            "127.0.0.1:11211"
        options: Client options merged over {"timeout": 0.3}: timeout,
            connect-timeout, retry-attempts, retry-timeout, dead-timeout,
            max-pool-size, max-key-length
        backend: Explicit flat backend to use instead of connecting to
            Memcached (e.g. DictBackend in tests)
        converter: Codec for structured values, JSON by default

    Example:
        >>> async with MemcachedWrapper("127.0.0.1:11211") as cache:
        ...     await cache.set("k", "abc", 10)
        ...     await cache.hashSet("user:1", "name", "Prinny", 60)
        ...     await cache.listSet("events", {"type": "login"}, 60, ListSetOptions(push=True))
        ...     await cache.hashGet("user:1")
        {'name': 'Prinny'}
    """

    def __init__(
        self,
        connectionArgs: Optional[Union[str, List[str]]] = None,
        options: Optional[Dict[str, Any]] = None,
        *,
        backend: Optional[AbstractScalarBackend] = None,
        converter: Optional[ValueConverter[Any]] = None,
    ):
        self._connectionArgs: Union[str, List[str]] = connectionArgs or DEFAULT_MEMCACHED_SERVER
        self._options: Dict[str, Any] = {**DEFAULT_OPTIONS, **(options or {})}
        self._closed = False
        maxKeyLength = self._options.get("max-key-length", MAX_KEY_LENGTH)

        if backend is None:
            if maxKeyLength > MAX_KEY_LENGTH:
                raise CacheConfigError(
                    f"max-key-length {maxKeyLength} exceeds Memcached limit of {MAX_KEY_LENGTH} bytes"
                )
            backend = MemcachedBackend(
                self._connectionArgs,
                timeout=self._options.get("timeout"),
                connectTimeout=self._options.get("connect-timeout"),
                retryAttempts=self._options.get("retry-attempts", 2),
                retryTimeout=self._options.get("retry-timeout", 1),
                deadTimeout=self._options.get("dead-timeout", 60),
                maxPoolSize=self._options.get("max-pool-size"),
            )
            logger.info(f"MemcachedWrapper connected to {self._connectionArgs}, dood!")

        self._client = ScalarCacheClient(backend, maxKeyLength=maxKeyLength)
        self._hashes = HashEngine(self._client, converter)
        self._lists = ListEngine(self._client, converter)

    @classmethod
    def fromConfig(cls, config: MemcachedConfig) -> "MemcachedWrapper":
        """
        Create wrapper from `[memcached]` configuration section.

        Example config:
            {"servers": ["10.0.0.1:11211"], "timeout": 0.5, "max-key-length": 250}
        """
        options = {k: v for k, v in config.items() if k != "servers"}
        return cls(config.get("servers"), options)

    @property
    def connectionArgs(self) -> Union[str, List[str]]:
        return self._connectionArgs

    @property
    def options(self) -> Dict[str, Any]:
        return dict(self._options)

    @property
    def backend(self) -> AbstractScalarBackend:
        return self._client.backend

    async def get(self, key: str) -> Optional[str]:
        """Get plain value, None if the key is absent."""
        return await self._client.get(key)

    async def set(self, key: str, value: str, ttl: float) -> str:
        """Store plain value for `ttl` seconds, returns the stored value."""
        return await self._client.set(key, value, ttl)

    async def delete(self, key: str) -> DeleteResult:
        """Delete key, always DeleteResult.OK even if the key was absent."""
        return await self._client.delete(key)

    async def hashSet(self, key: str, field: str, data: Any, ttl: float) -> None:
        """Set hash field; the whole hash expiration is reset to `ttl`."""
        await self._hashes.hashSet(key, field, data, ttl)

    async def hashGet(self, key: str, field: Optional[str] = None) -> Any:
        """Get whole hash or single field, None if absent."""
        return await self._hashes.hashGet(key, field)

    async def hashDel(
        self, key: str, field: Optional[str] = None, options: Optional[HashDelOptions] = None
    ) -> DeleteResult:
        """Delete hash field (options.ttl required) or the whole hash."""
        return await self._hashes.hashDel(key, field, options)

    async def listSet(self, key: str, data: Any, ttl: float, options: Optional[ListSetOptions] = None) -> None:
        """Prepend (default), append or overwrite list element."""
        await self._lists.listSet(key, data, ttl, options)

    async def listGet(self, key: str, options: Optional[ListGetOptions] = None) -> Any:
        """Get whole list, element or inclusive slice, None if absent."""
        return await self._lists.listGet(key, options)

    async def listDel(self, key: str, ttl: float, options: Optional[ListDelOptions] = None) -> DeleteResult:
        """Delete list elements, or the whole key if no options given."""
        return await self._lists.listDel(key, ttl, options)

    async def close(self) -> None:
        """
        Close connection to Memcached servers.

        Safe to call more than once, only the first call reaches the backend.
        """
        if self._closed:
            return
        self._closed = True
        await self._client.close()
        logger.info("MemcachedWrapper closed, dood!")

    async def __aenter__(self) -> "MemcachedWrapper":
        return self

    async def __aexit__(self, excType, excValue, traceback) -> None:
        await self.close()
