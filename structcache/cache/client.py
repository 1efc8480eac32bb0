"""
Scalar cache client

Thin async wrapper around a flat backend which validates keys and arguments
before any I/O, wraps driver errors and returns uniform results.
"""

import logging
import math
from typing import Any, Optional

from .backends.abstract import AbstractScalarBackend
from .exceptions import CacheBackendError, DeleteError, InvalidArgumentError, RetrievalError, StoreError
from .keys import validateKey
from .types import MAX_KEY_LENGTH, DeleteResult

logger = logging.getLogger(__name__)


def validateTtl(ttl: Any) -> None:
    """
    Check that TTL is a positive finite number of seconds.

    Raises:
        InvalidArgumentError: If ttl is missing, not a number, not positive or not finite
    """
    if isinstance(ttl, bool) or not isinstance(ttl, (int, float)) or not ttl > 0:
        raise InvalidArgumentError(f"TTL must be a positive number of seconds, got {ttl!r}")
    if isinstance(ttl, float) and not math.isfinite(ttl):
        raise InvalidArgumentError(f"TTL must be a positive number of seconds, got {ttl!r}")


class ScalarCacheClient:
    """
    Async client for flat string values with expiration.

    All operations validate the key first and never touch the backend with
    an invalid key. The backend handle is owned by the caller and shared by
    every component built on top of this client.

    Args:
        backend: Flat backend handle
        maxKeyLength: Maximum accepted key length

    Example:
        >>> client = ScalarCacheClient(DictBackend())
        >>> await client.set("k", "abc", 10)
        'abc'
        >>> await client.get("k")
        'abc'
        >>> await client.delete("k")
        <DeleteResult.OK: 'OK'>
    """

    def __init__(self, backend: AbstractScalarBackend, maxKeyLength: int = MAX_KEY_LENGTH):
        self.backend = backend
        self.maxKeyLength = maxKeyLength

    def validateKey(self, key: Any) -> None:
        validateKey(key, self.maxKeyLength)

    async def get(self, key: str) -> Optional[str]:
        """
        Get value by key.

        Returns:
            Stored value or None if the key is absent

        Raises:
            InvalidKeyError: If the key is invalid
            RetrievalError: If the backend fails
        """
        self.validateKey(key)
        try:
            return await self.backend.rawGet(key)
        except CacheBackendError:
            raise
        except Exception as e:
            raise RetrievalError(f"Failed to get key {key}: {e}", key=key, originalError=e) from e

    async def set(self, key: str, value: str, ttl: float) -> str:
        """
        Store value under the key for `ttl` seconds.

        Returns:
            The stored value

        Raises:
            InvalidKeyError: If the key is invalid
            InvalidArgumentError: If ttl is not a positive number or value is not a string
            StoreError: If the backend fails or refuses to store the value
        """
        self.validateKey(key)
        validateTtl(ttl)
        if value is None:
            raise InvalidArgumentError("Value to store is missing")
        if not isinstance(value, str):
            raise InvalidArgumentError(f"Value to store must be a string, got {type(value).__name__}")

        try:
            stored = await self.backend.rawSet(key, value, ttl)
        except CacheBackendError:
            raise
        except Exception as e:
            raise StoreError(f"Failed to set key {key}: {e}", key=key, originalError=e) from e

        if not stored:
            raise StoreError(f"Backend refused to store key {key}", key=key)
        return value

    async def delete(self, key: str) -> DeleteResult:
        """
        Delete value by key.

        Returns:
            DeleteResult.OK whether or not the key existed

        Raises:
            InvalidKeyError: If the key is invalid
            DeleteError: If the backend fails
        """
        self.validateKey(key)
        try:
            deleted = await self.backend.rawDelete(key)
        except CacheBackendError:
            raise
        except Exception as e:
            raise DeleteError(f"Failed to delete key {key}: {e}", key=key, originalError=e) from e

        if not deleted:
            logger.debug(f"Key {key} was already absent on delete")
        return DeleteResult.OK

    async def close(self) -> None:
        await self.backend.close()
