"""
Tests for value converters, dood!
"""

import pytest

from structcache.cache.exceptions import DecodeError
from structcache.cache.value_converter import JsonValueConverter, StringValueConverter


class TestJsonValueConverter:
    def setup_method(self):
        self.converter = JsonValueConverter()

    @pytest.mark.parametrize(
        "value",
        [
            {},
            [],
            {"name": "Prinny", "level": 99, "tags": ["demon", "squad"], "meta": {"active": True, "score": None}},
            [1, "two", 3.5, None, False, {"nested": [1, [2, [3]]]}],
        ],
    )
    def testRoundTrip(self, value):
        assert self.converter.decode(self.converter.encode(value)) == value

    def testEncodeIsCompactAndKeepsUnicode(self):
        assert self.converter.encode({"name": "Принни", "ids": [1, 2]}) == '{"name":"Принни","ids":[1,2]}'

    def testEncodeKeepsKeyOrder(self):
        assert self.converter.encode({"b": 1, "a": 2}) == '{"b":1,"a":2}'

    def testDecodeBytes(self):
        assert self.converter.decode('{"a":1}'.encode("utf-8")) == {"a": 1}

    def testDecodeInvalidJson(self):
        with pytest.raises(DecodeError) as excInfo:
            self.converter.decode("{not json")
        assert isinstance(excInfo.value.originalError, ValueError)

    def testEncodeUnserializable(self):
        with pytest.raises(TypeError):
            self.converter.encode({"value": object()})


class TestStringValueConverter:
    def testPassThrough(self):
        converter = StringValueConverter()
        assert converter.encode("abc") == "abc"
        assert converter.decode("abc") == "abc"

    def testRejectsNonString(self):
        with pytest.raises(TypeError):
            StringValueConverter().encode(123)  # pyright: ignore[reportArgumentType]
