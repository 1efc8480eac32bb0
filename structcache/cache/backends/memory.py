"""
In-process dictionary scalar backend

Keeps values in a plain dictionary with monotonic-clock expiration. Used in
tests and for running without a Memcached server. Expired entries are
dropped lazily on access.
"""

import logging
import time
from typing import Callable, Dict, Optional, Tuple

from .abstract import AbstractScalarBackend

logger = logging.getLogger(__name__)


class DictBackend(AbstractScalarBackend):
    """
    Dictionary-based flat backend with TTL support.

    Args:
        timeFunc: Clock used for expiration, time.monotonic by default

    Example:
        >>> backend = DictBackend()
        >>> await backend.rawSet("key", "value", 10)
        True
        >>> await backend.rawGet("key")
        'value'
    """

    def __init__(self, timeFunc: Callable[[], float] = time.monotonic):
        self._timeFunc = timeFunc
        self._entries: Dict[str, Tuple[str, float]] = {}

    def _getEntry(self, key: str) -> Optional[Tuple[str, float]]:
        entry = self._entries.get(key)
        if entry is not None and entry[1] <= self._timeFunc():
            del self._entries[key]
            return None
        return entry

    async def rawGet(self, key: str) -> Optional[str]:
        entry = self._getEntry(key)
        return entry[0] if entry is not None else None

    async def rawSet(self, key: str, value: str, ttl: float) -> bool:
        self._entries[key] = (value, self._timeFunc() + ttl)
        return True

    async def rawDelete(self, key: str) -> bool:
        if self._getEntry(key) is None:
            return False
        del self._entries[key]
        return True

    async def close(self) -> None:
        # Nothing to release, entries stay available to other holders of this backend
        logger.debug("DictBackend closed, dood!")

    def __len__(self) -> int:
        now = self._timeFunc()
        return sum(1 for _, expiresAt in self._entries.values() if expiresAt > now)
