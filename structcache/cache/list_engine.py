"""
List simulation over a flat backend, dood!

A list is an ordered sequence of JSON values stored as one scalar entry.
The whole list shares one TTL which is reset on every write. Positions are
zero-based and range ends are inclusive.
"""

import logging
from typing import Any, List, Optional

from .client import validateTtl
from .engine import BaseStructuredEngine
from .exceptions import InvalidArgumentError
from .types import DeleteResult, ListDelOptions, ListGetOptions, ListSetOptions

logger = logging.getLogger(__name__)


def _checkPosition(name: str, value: Optional[int]) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"List {name} must be an integer, got {type(value).__name__}")


def _isGiven(value: Optional[int]) -> bool:
    """Position counts as given for deletion only when it is non-negative."""
    return value is not None and value >= 0


class ListEngine(BaseStructuredEngine):
    """
    Index and range operations on simulated lists.

    Example:
        >>> engine = ListEngine(ScalarCacheClient(DictBackend()))
        >>> await engine.listSet("events", "b", 60)
        >>> await engine.listSet("events", "a", 60)
        >>> await engine.listSet("events", "c", 60, ListSetOptions(push=True))
        >>> await engine.listGet("events")
        ['a', 'b', 'c']
        >>> await engine.listGet("events", ListGetOptions(start=1, end=2))
        ['b', 'c']
    """

    structureType = list
    structureName = "list"

    async def listSet(self, key: str, data: Any, ttl: float, options: Optional[ListSetOptions] = None) -> None:
        """
        Insert or overwrite an element, creating the list if absent.

        With `options.index` the element at that position is overwritten and
        the list is padded with None when it is shorter. Otherwise data is
        appended when `push` is set (or `unshift` is disabled) and inserted
        at the head by default.

        Raises:
            InvalidKeyError: If the key is invalid
            InvalidArgumentError: If ttl is not positive or index is negative
            RetrievalError, StoreError: If the backend fails
        """
        self.client.validateKey(key)
        validateTtl(ttl)
        options = options or ListSetOptions()
        _checkPosition("index", options.index)
        if options.index is not None and options.index < 0:
            raise InvalidArgumentError(f"List index must not be negative, got {options.index}")

        sequence: List[Any] = await self._load(key) or []

        if options.index is not None:
            if options.index >= len(sequence):
                sequence.extend([None] * (options.index + 1 - len(sequence)))
            sequence[options.index] = data
        elif options.push or not options.unshift:
            sequence.append(data)
        else:
            sequence.insert(0, data)

        await self._save(key, sequence, ttl)

    async def listGet(self, key: str, options: Optional[ListGetOptions] = None) -> Any:
        """
        Get whole list, single element or inclusive slice.

        Returns:
            None if the list is absent. Otherwise, depending on options:
            - nothing given: the whole list
            - index: element at index (None if out of range)
            - start and end: elements from start to end inclusive
            - start only: elements from start to the end of the list
            - end only: elements from the head to end inclusive
        """
        self.client.validateKey(key)
        if options is not None:
            for name in ("index", "start", "end"):
                _checkPosition(name, getattr(options, name))

        sequence = await self._load(key)
        if sequence is None:
            return None
        if options is None or options.isEmpty():
            return sequence

        if options.index is not None:
            if 0 <= options.index < len(sequence):
                return sequence[options.index]
            return None

        start = options.start if options.start is not None else 0
        if options.end is None:
            return sequence[start:]
        return sequence[start : options.end + 1]

    async def listDel(self, key: str, ttl: float, options: Optional[ListDelOptions] = None) -> DeleteResult:
        """
        Delete elements from the list, or the whole key.

        Without options (or with options where nothing is set) the whole key
        is deleted. Otherwise, first matching rule wins:
        - clear: remove all elements but keep the key
        - index >= 0: remove that element
        - start >= 0 and end >= 0: remove elements from start to end inclusive
        - start >= 0: truncate the list before start
        - end >= 0: remove elements from the head to end inclusive
        - only negative positions: remove all elements but keep the key

        The remaining list is re-saved with `ttl`.

        Returns:
            DeleteResult.OK, or DeleteResult.NOT_FOUND if the list is absent
            or empty (nothing is written in this case)
        """
        self.client.validateKey(key)
        if options is None or options.isEmpty():
            return await self.client.delete(key)
        for name in ("index", "start", "end"):
            _checkPosition(name, getattr(options, name))

        sequence: Optional[List[Any]] = await self._load(key)
        if not sequence:
            logger.debug(f"List {key} is absent or empty, nothing to delete")
            return DeleteResult.NOT_FOUND

        if options.clear:
            sequence.clear()
        elif _isGiven(options.index):
            if options.index < len(sequence):  # pyright: ignore[reportOptionalOperand]
                del sequence[options.index]  # pyright: ignore[reportArgumentType]
        elif _isGiven(options.start) and _isGiven(options.end):
            del sequence[options.start : options.end + 1]  # pyright: ignore[reportOptionalOperand]
        elif _isGiven(options.start):
            del sequence[options.start :]
        elif _isGiven(options.end):
            del sequence[: options.end + 1]  # pyright: ignore[reportOptionalOperand]
        else:
            sequence.clear()

        await self._save(key, sequence, ttl)
        return DeleteResult.OK
