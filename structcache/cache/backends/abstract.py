"""
Abstract scalar backend interface

This module defines the abstract base class for flat key-value backends.
A flat backend only knows how to get, set (with TTL) and delete string values
by key, everything structured is built on top of these primitives.
"""

from abc import ABC, abstractmethod
from typing import Optional


class AbstractScalarBackend(ABC):
    """
    Abstract base class for flat scalar backends.

    Keys passed here are already validated. Implementations should wrap
    driver errors into CacheBackendError subclasses where appropriate.
    """

    @abstractmethod
    async def rawGet(self, key: str) -> Optional[str]:
        """
        Retrieve string value for the specified key.

        Args:
            key: The validated cache key

        Returns:
            The stored value, or None if the key is absent or expired

        Raises:
            RetrievalError: If the retrieval fails (not for missing keys)
        """
        pass

    @abstractmethod
    async def rawSet(self, key: str, value: str, ttl: float) -> bool:
        """
        Store string value under the key with the given TTL.

        Args:
            key: The validated cache key
            value: The value to store
            ttl: Positive number of seconds to live

        Returns:
            True if the backend accepted the value, False otherwise

        Raises:
            StoreError: If the storage operation fails
        """
        pass

    @abstractmethod
    async def rawDelete(self, key: str) -> bool:
        """
        Delete the value for the specified key.

        Returns:
            True if the value was deleted, False if the key did not exist

        Raises:
            DeleteError: If the deletion fails
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release backend connections."""
        pass
