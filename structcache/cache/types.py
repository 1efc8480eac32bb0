"""
Core type definitions and protocols for structcache.cache, dood!

This module contains the value converter protocol, per-operation option
structures for simulated hashes and lists, the delete result type and
configuration dictionaries for both backends.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Dict, List, Optional, Protocol, TypeVar, Union

# closed= keyword of TypedDict is only available from typing_extensions
from typing_extensions import NotRequired, TypedDict

V = TypeVar("V")  # Value type - can be any type

# Maximum key length accepted by Memcached protocol
MAX_KEY_LENGTH = 250

DEFAULT_MEMCACHED_SERVER = "127.0.0.1:11211"
DEFAULT_REDIS_URL = "redis://127.0.0.1:6379"


class ValueConverter(Protocol[V]):
    """
    Protocol for converting objects to cache values and back, dood!

    Type Parameters:
        V: The type of objects that can be converted to cache values
    """

    def encode(self, obj: V) -> str:
        """
        Convert object to cache value, dood!

        Args:
            obj: The object to convert to a cache value

        Returns:
            str: A string representation suitable for use as a cache value
        """
        ...

    def decode(self, value: str) -> V:
        """
        Decode cache value to object, dood!

        Args:
            value: The cache value to decode

        Returns:
            V: The decoded object
        """
        ...


class DeleteResult(StrEnum):
    """
    Result of delete-like operations.

    Members compare equal to plain strings, so `DeleteResult.OK == "OK"`.
    """

    OK = "OK"
    """Entry (or part of it) was deleted, or was already absent"""
    NOT_FOUND = "Data not found"
    """Nothing to delete: entry, field or list elements are absent"""


@dataclass
class HashDelOptions:
    """
    Options for hashDel.

    Attributes:
        ttl: TTL in seconds for re-saving the hash after a field is removed.
            Required when deleting a single field.
    """

    ttl: Optional[float] = None


@dataclass
class ListSetOptions:
    """
    Options for listSet.

    Attributes:
        index: Position to overwrite. The list is padded with None up to this
            position if it is shorter. None means "insert" instead.
        unshift: Insert at the head of the list (default behaviour).
        push: Append to the tail of the list, takes precedence over unshift.
    """

    index: Optional[int] = None
    unshift: bool = True
    push: bool = False


@dataclass
class ListGetOptions:
    """
    Options for listGet. Positions are zero-based, `end` is inclusive.

    Attributes:
        index: Return single element at this position.
        start: First position of the slice.
        end: Last position of the slice (inclusive).
    """

    index: Optional[int] = None
    start: Optional[int] = None
    end: Optional[int] = None

    def isEmpty(self) -> bool:
        return self.index is None and self.start is None and self.end is None


@dataclass
class ListDelOptions:
    """
    Options for listDel. Positions are zero-based, `end` is inclusive.
    Negative positions are treated as not given. Options with nothing set
    mean the same as no options: the whole key is deleted.

    Attributes:
        index: Remove single element at this position.
        start: First position of the range to remove.
        end: Last position of the range to remove (inclusive).
        clear: Remove all elements but keep the key, positions are ignored.
    """

    index: Optional[int] = None
    start: Optional[int] = None
    end: Optional[int] = None
    clear: bool = False

    def isEmpty(self) -> bool:
        return not self.clear and self.index is None and self.start is None and self.end is None


class MemcachedConfig(TypedDict, closed=False):
    """
    Configuration of the Memcached wrapper (`[memcached]` section).

    Attributes:
        servers: "host:port" string or list of them
        timeout: Socket timeout in seconds
        connect-timeout: Connect timeout in seconds
        retry-attempts: Number of attempts before server is marked dead
        retry-timeout: Seconds between retry attempts
        dead-timeout: Seconds to keep dead server out of rotation
        max-pool-size: Maximum connections per server
        max-key-length: Maximum accepted key length
    """

    servers: NotRequired[Union[str, List[str]]]
    timeout: NotRequired[float]
    # Dashed keys can't be declared here, they are read with .get()


class RedisConfig(TypedDict, closed=False):
    """
    Configuration of the Redis wrapper (`[redis]` section).

    Attributes:
        url: Redis connection URL
        options: Extra keyword arguments passed to redis.asyncio.Redis.from_url
    """

    url: NotRequired[str]
    options: NotRequired[Dict[str, Any]]
