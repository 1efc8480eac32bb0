"""
Hash simulation over a flat backend, dood!

A hash is a mapping of string fields to JSON values stored as one scalar
entry. The whole hash shares one TTL which is reset on every field write.
"""

import logging
from typing import Any, Dict, Optional

from .client import validateTtl
from .engine import BaseStructuredEngine
from .exceptions import InvalidFieldError
from .types import DeleteResult, HashDelOptions

logger = logging.getLogger(__name__)


class HashEngine(BaseStructuredEngine):
    """
    Field-level operations on simulated hashes.

    Example:
        >>> engine = HashEngine(ScalarCacheClient(DictBackend()))
        >>> await engine.hashSet("user:1", "name", "Prinny", 60)
        >>> await engine.hashGet("user:1", "name")
        'Prinny'
        >>> await engine.hashGet("user:1")
        {'name': 'Prinny'}
    """

    structureType = dict
    structureName = "hash"

    async def hashSet(self, key: str, field: str, data: Any, ttl: float) -> None:
        """
        Set (overwrite) single field of the hash, creating the hash if absent.

        Nested values are replaced, never merged. The whole hash is re-saved
        with `ttl`, so its expiration is reset.

        Raises:
            InvalidKeyError: If the key is invalid
            InvalidFieldError: If field is not a string
            InvalidArgumentError: If ttl is not a positive number
            RetrievalError, StoreError: If the backend fails
        """
        self.client.validateKey(key)
        if not isinstance(field, str):
            raise InvalidFieldError(f"The field name must be a string, got {type(field).__name__}")
        validateTtl(ttl)

        mapping: Dict[str, Any] = await self._load(key) or {}
        mapping[field] = data
        await self._save(key, mapping, ttl)

    async def hashGet(self, key: str, field: Optional[str] = None) -> Any:
        """
        Get whole hash or single field.

        Returns:
            None if the hash is absent, the whole mapping if field is not
            given, otherwise the field value (None if the field is absent)
        """
        self.client.validateKey(key)
        mapping = await self._load(key)
        if mapping is None:
            return None
        if field is None:
            return mapping
        return mapping.get(field)

    async def hashDel(
        self, key: str, field: Optional[str] = None, options: Optional[HashDelOptions] = None
    ) -> DeleteResult:
        """
        Delete single field or the whole hash.

        Without field the whole key is deleted. Removing a field re-saves the
        rest of the hash with `options.ttl`, which is required in this case.

        Returns:
            DeleteResult.OK on success, DeleteResult.NOT_FOUND if the hash or
            field is absent

        Raises:
            InvalidArgumentError: If a field is removed and options.ttl is not
                a positive number
        """
        self.client.validateKey(key)
        if field is None:
            return await self.client.delete(key)

        mapping = await self._load(key)
        if mapping is None or field not in mapping:
            logger.debug(f"Field {field} not found in hash {key}")
            return DeleteResult.NOT_FOUND

        del mapping[field]
        ttl = options.ttl if options is not None else None
        await self._save(key, mapping, ttl)  # pyright: ignore[reportArgumentType]
        return DeleteResult.OK
