"""
Redis wrapper, dood!

Redis supports hashes and lists natively, so this wrapper only owns the
connection: use `client` for every operation and `close()` at shutdown.
"""

import logging
from typing import Any, Dict, Optional

from redis.asyncio import Redis

from .types import DEFAULT_REDIS_URL, RedisConfig

logger = logging.getLogger(__name__)


class RedisWrapper:
    """
    Owner of a redis.asyncio client.

    Args:
        connectionArgs: Redis connection URL, "redis://127.0.0.1:6379" by default
        options: Keyword arguments passed to Redis.from_url (decode_responses etc.)

    Example:
        >>> async with RedisWrapper("redis://localhost:6379/0") as redis:
        ...     await redis.client.hset("user:1", "name", "Prinny")
        ...     await redis.client.hget("user:1", "name")
    """

    def __init__(self, connectionArgs: Optional[str] = None, options: Optional[Dict[str, Any]] = None):
        self._connectionArgs: str = connectionArgs or DEFAULT_REDIS_URL
        self._options: Dict[str, Any] = dict(options or {})
        self._client: Redis = Redis.from_url(self._connectionArgs, **self._options)
        self._closed = False
        logger.info("RedisWrapper created, dood!")

    @classmethod
    def fromConfig(cls, config: RedisConfig) -> "RedisWrapper":
        """Create wrapper from `[redis]` configuration section."""
        return cls(config.get("url"), config.get("options"))

    @property
    def connectionArgs(self) -> str:
        return self._connectionArgs

    @property
    def client(self) -> Redis:
        return self._client

    async def close(self) -> None:
        """Close the connection pool, only the first call has effect."""
        if self._closed:
            return
        self._closed = True
        await self._client.aclose()
        logger.info("RedisWrapper closed, dood!")

    async def __aenter__(self) -> "RedisWrapper":
        return self

    async def __aexit__(self, excType, excValue, traceback) -> None:
        await self.close()
