"""
Value converter implementations for cache storage, dood!

Flat backends only store strings, so every simulated hash or list is passed
through a converter on each read and write. JsonValueConverter is the
canonical codec, StringValueConverter is a pass-through for plain strings.
"""

import json
from typing import Any

from .. import utils

from .exceptions import DecodeError
from .types import V, ValueConverter


class StringValueConverter(ValueConverter[str]):
    """
    Pass-through converter for string values, dood!
    """

    def encode(self, obj: str) -> str:
        """
        Encode a string object for cache storage, dood!

        Raises:
            TypeError: If obj is not a string
        """
        if not isinstance(obj, str):
            raise TypeError(f"StringValueConverter expects string input, got {type(obj).__name__}")

        return obj

    def decode(self, value: str) -> str:
        return value


class JsonValueConverter(ValueConverter[V]):
    """
    JSON converter for serializable objects, dood!

    Mappings, sequences and scalars are stored as compact JSON text with key
    order preserved, so `decode(encode(x)) == x` for any JSON-representable x.
    Tuples come back as lists.
    """

    def encode(self, obj: V) -> str:
        """
        Encode object to compact JSON.

        Raises:
            TypeError: If obj contains values JSON can't represent
        """
        return utils.jsonDumps(obj)

    def decode(self, value: Any) -> V:
        """
        Decode JSON text (or UTF-8 bytes) back to object.

        Raises:
            DecodeError: If value is not valid JSON
        """
        try:
            return json.loads(value)
        except (TypeError, ValueError) as e:
            raise DecodeError(f"Failed to decode cached value: {e}", originalError=e) from e
