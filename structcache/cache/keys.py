"""
Cache key validation.

Keys follow the Memcached text protocol rules: no whitespace or control
characters and at most 250 bytes once encoded to UTF-8.
"""

import re
from typing import Any

from .exceptions import InvalidKeyError
from .types import MAX_KEY_LENGTH

WHITESPACE_PATTERN = re.compile(r"\s")
# Whitespace and ASCII control characters split or terminate protocol commands
FORBIDDEN_CHARS_PATTERN = re.compile(r"[\s\x00-\x1f\x7f]")


def validateKey(key: Any, maxLength: int = MAX_KEY_LENGTH) -> None:
    """
    Validate a cache key before it is sent to the backend.

    The key must be a string which is non-empty once all whitespace is
    removed, must not contain whitespace or control characters, and its
    UTF-8 encoding must not be longer than `maxLength` bytes.

    Args:
        key: Candidate cache key
        maxLength: Maximum allowed key length in bytes (250 for Memcached)

    Raises:
        InvalidKeyError: If the key is not a string, is empty, contains
            forbidden characters or is too long

    Examples:
        >>> validateKey("user:123")
        >>> validateKey("   ")
        Traceback (most recent call last):
        ...
        structcache.cache.exceptions.InvalidKeyError: The key cannot be empty
    """
    if not isinstance(key, str):
        raise InvalidKeyError(f"The key must be a string, got {type(key).__name__}")

    if not WHITESPACE_PATTERN.sub("", key):
        raise InvalidKeyError("The key cannot be empty")

    if FORBIDDEN_CHARS_PATTERN.search(key):
        raise InvalidKeyError(f"The key must not contain whitespace or control characters: {key!r}")

    keyLength = len(key.encode("utf-8"))
    if keyLength > maxLength:
        raise InvalidKeyError(f"The key exceeds maximum length of {maxLength} bytes. Length: {keyLength}")
