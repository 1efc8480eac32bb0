"""
Cache exceptions

This module defines the exception hierarchy for structcache.
All cache-related errors inherit from CacheError base class.
"""

from typing import Optional


class CacheError(Exception):
    """
    Base exception for all cache errors.

    Catch this to handle any cache error generically.
    """

    pass


class InvalidKeyError(CacheError):
    """
    Exception raised when a cache key is invalid.

    Raised synchronously, before any backend call, when the key:
    - Is not a string
    - Is empty or consists only of whitespace
    - Exceeds maximum length
    """

    pass


class InvalidArgumentError(CacheError):
    """
    Exception raised when operation arguments are malformed.

    For example: TTL is not a positive number, value to store is missing,
    or list position is negative.
    """

    pass


class InvalidFieldError(CacheError):
    """Exception raised when a hash field name is not a string."""

    pass


class DecodeError(CacheError):
    """Exception raised when a stored value can't be decoded by the value converter."""

    def __init__(self, message: str, originalError: Optional[Exception] = None):
        super().__init__(message)
        self.originalError = originalError


class CacheConfigError(CacheError):
    """
    Exception raised when cache configuration is invalid.

    Raised during wrapper or config manager initialization when:
    - Configuration file is missing
    - Configuration values are invalid
    - Backend type is not recognized
    """

    pass


class CacheBackendError(CacheError):
    """
    Exception raised when a backend operation fails.

    Wraps driver-specific errors (network errors, timeouts, server errors).
    The original driver exception is kept in `originalError` and chained
    as `__cause__`. Nothing is retried at this level.

    Args:
        message: Description of the backend error
        key: Cache key the operation was performed on (optional)
        originalError: The original exception that caused this error (optional)
    """

    def __init__(self, message: str, key: Optional[str] = None, originalError: Optional[Exception] = None):
        super().__init__(message)
        self.key = key
        self.originalError = originalError


class RetrievalError(CacheBackendError):
    """Exception raised when reading a value from the backend fails."""

    pass


class StoreError(CacheBackendError):
    """Exception raised when writing a value to the backend fails."""

    pass


class DeleteError(CacheBackendError):
    """Exception raised when deleting a value from the backend fails."""

    pass
