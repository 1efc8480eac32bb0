"""
Memcached scalar backend implementation

This module provides a flat backend for one or more Memcached servers.
Uses pymemcache HashClient with connection pooling; pymemcache is blocking,
so every call is executed in a worker thread.
"""

import asyncio
import logging
import math
import time
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from pymemcache.client.hash import HashClient

from ..exceptions import CacheConfigError, DeleteError, RetrievalError, StoreError
from .abstract import AbstractScalarBackend

logger = logging.getLogger(__name__)

DEFAULT_PORT = 11211

# Memcached treats expirations above 30 days as absolute unix timestamps
MAX_RELATIVE_EXPIRE = 60 * 60 * 24 * 30

ServerSpec = Union[str, Tuple[str, int]]


def parseServer(server: ServerSpec) -> Tuple[str, int]:
    """
    Parse server specification into (host, port) tuple.

    Args:
        server: "host", "host:port" or (host, port) tuple

    Returns:
        (host, port) tuple

    Raises:
        CacheConfigError: If the specification can't be parsed

    Examples:
        >>> parseServer("127.0.0.1:11211")
        ('127.0.0.1', 11211)
        >>> parseServer("cache.local")
        ('cache.local', 11211)
    """
    if isinstance(server, tuple):
        host, port = server
        return str(host), int(port)

    if not isinstance(server, str) or not server.strip():
        raise CacheConfigError(f"Invalid memcached server specification: {server!r}")

    host, sep, port = server.strip().rpartition(":")
    if not sep:
        return port, DEFAULT_PORT

    try:
        return host, int(port)
    except ValueError as e:
        raise CacheConfigError(f"Invalid port in memcached server specification: {server!r}") from e


def parseServers(servers: Union[ServerSpec, Iterable[ServerSpec]]) -> List[Tuple[str, int]]:
    """Parse one server specification or a list of them."""
    if isinstance(servers, (str, tuple)):
        servers = [servers]
    ret = [parseServer(server) for server in servers]
    if not ret:
        raise CacheConfigError("At least one memcached server must be configured")
    return ret


def toExpire(ttl: float) -> int:
    """Convert TTL in seconds to memcached expiration value."""
    expire = int(math.ceil(ttl))
    if expire > MAX_RELATIVE_EXPIRE:
        return int(time.time()) + expire
    return expire


class MemcachedBackend(AbstractScalarBackend):
    """
    Memcached backend using pymemcache.

    Features:
    - Consistent hashing over several servers (HashClient)
    - Per-server connection pool, so concurrent calls from worker threads are safe
    - Driver errors are wrapped into RetrievalError/StoreError/DeleteError

    Args:
        servers: "host:port" string, (host, port) tuple or list of them
        timeout: Socket timeout in seconds
        connectTimeout: Connect timeout in seconds (defaults to timeout)
        retryAttempts: Attempts before a server is marked dead
        retryTimeout: Seconds between retry attempts
        deadTimeout: Seconds to keep a dead server out of rotation
        maxPoolSize: Maximum pooled connections per server

    Example:
        >>> backend = MemcachedBackend(["10.0.0.1:11211", "10.0.0.2:11211"], timeout=0.3)
        >>> await backend.rawSet("greeting", "hello", 60)
        >>> await backend.rawGet("greeting")
        'hello'
    """

    def __init__(
        self,
        servers: Union[ServerSpec, Iterable[ServerSpec]],
        timeout: Optional[float] = None,
        connectTimeout: Optional[float] = None,
        retryAttempts: int = 2,
        retryTimeout: float = 1,
        deadTimeout: float = 60,
        maxPoolSize: Optional[int] = None,
    ):
        self.servers = parseServers(servers)
        clientKwargs: Dict[str, Any] = {
            "timeout": timeout,
            "connect_timeout": connectTimeout if connectTimeout is not None else timeout,
            "retry_attempts": retryAttempts,
            "retry_timeout": retryTimeout,
            "dead_timeout": deadTimeout,
            "use_pooling": True,
            "ignore_exc": False,
            # Keys are validated as UTF-8 before reaching the driver
            "allow_unicode_keys": True,
        }
        if maxPoolSize is not None:
            clientKwargs["max_pool_size"] = maxPoolSize

        self.client = HashClient(self.servers, **clientKwargs)
        logger.debug(f"Created memcached client for servers {self.servers}, dood!")

    async def rawGet(self, key: str) -> Optional[str]:
        try:
            value = await asyncio.to_thread(self.client.get, key)
        except Exception as e:
            logger.warning(f"Memcached get failed for key {key}: {e}")
            raise RetrievalError(f"Failed to get key {key}: {e}", key=key, originalError=e) from e

        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def rawSet(self, key: str, value: str, ttl: float) -> bool:
        try:
            return bool(await asyncio.to_thread(self.client.set, key, value.encode("utf-8"), toExpire(ttl), False))
        except Exception as e:
            logger.warning(f"Memcached set failed for key {key}: {e}")
            raise StoreError(f"Failed to set key {key}: {e}", key=key, originalError=e) from e

    async def rawDelete(self, key: str) -> bool:
        try:
            return bool(await asyncio.to_thread(self.client.delete, key, False))
        except Exception as e:
            logger.warning(f"Memcached delete failed for key {key}: {e}")
            raise DeleteError(f"Failed to delete key {key}: {e}", key=key, originalError=e) from e

    async def close(self) -> None:
        await asyncio.to_thread(self.client.disconnect_all)
        logger.debug(f"Disconnected from memcached servers {self.servers}, dood!")
