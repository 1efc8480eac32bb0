"""
Base class for structured value simulation over a flat backend.
"""

import logging
from typing import Any, Optional, Type

from .client import ScalarCacheClient
from .exceptions import DecodeError
from .types import ValueConverter
from .value_converter import JsonValueConverter

logger = logging.getLogger(__name__)


class BaseStructuredEngine:
    """
    Common read/write helpers for simulated structures.

    Every structure lives in a single scalar entry, encoded by the value
    converter. Mutations are read-decode-mutate-encode-write cycles without
    any locking or version check: concurrent writers to the same key race
    and the last write wins.

    Args:
        client: Scalar client used for all backend access
        converter: Codec for stored values, JSON by default
    """

    structureType: Type = object
    structureName: str = "structure"

    def __init__(self, client: ScalarCacheClient, converter: Optional[ValueConverter[Any]] = None):
        self.client = client
        self.converter: ValueConverter[Any] = converter if converter is not None else JsonValueConverter()

    async def _load(self, key: str) -> Optional[Any]:
        """
        Read and decode stored structure.

        Returns:
            Decoded structure or None if the key is absent or holds an empty string

        Raises:
            DecodeError: If stored value can't be decoded or has wrong type
        """
        raw = await self.client.get(key)
        # Empty stored value counts as absent structure
        if raw is None or raw == "":
            return None

        value = self.converter.decode(raw)
        if not isinstance(value, self.structureType):
            raise DecodeError(
                f"Value stored under key {key} is {type(value).__name__}, not a {self.structureName}"
            )
        return value

    async def _save(self, key: str, value: Any, ttl: float) -> None:
        await self.client.set(key, self.converter.encode(value), ttl)
        logger.debug(f"Saved {self.structureName} {key} ({len(value)} items, ttl={ttl})")
