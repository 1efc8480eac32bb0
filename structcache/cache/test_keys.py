"""
Tests for cache key validation.
"""

import pytest
from pymemcache.client.base import check_key_helper
from pymemcache.exceptions import MemcacheIllegalInputError

from structcache.cache.exceptions import InvalidKeyError
from structcache.cache.keys import validateKey

VALID_KEYS = ["k", "user:123", "ключ", "emoji-🙂", "a" * 250, "é" * 125]
INVALID_KEYS = ["key with spaces", "tab\tkey", "line\nbreak", "nul\x00key", "é" * 126, "a" * 251]


class TestValidateKey:
    """Test validateKey, dood!"""

    @pytest.mark.parametrize("key", VALID_KEYS)
    def testAcceptsValidKeys(self, key):
        validateKey(key)

    @pytest.mark.parametrize("key", ["", "   ", "\t\n", " \r "])
    def testRejectsEmptyKeys(self, key):
        with pytest.raises(InvalidKeyError, match="empty"):
            validateKey(key)

    def testRejectsTooLongKey(self):
        with pytest.raises(InvalidKeyError, match="maximum length of 250"):
            validateKey("a" * 251)

    def testLengthIsCountedInBytes(self):
        # 250 characters, 500 bytes in UTF-8
        with pytest.raises(InvalidKeyError, match="Length: 500"):
            validateKey("é" * 250)

    @pytest.mark.parametrize("key", ["key with spaces", " leading", "trailing\n", "a\x00b", "a\x1bb", "a\x7fb"])
    def testRejectsWhitespaceAndControlCharacters(self, key):
        with pytest.raises(InvalidKeyError, match="whitespace or control"):
            validateKey(key)

    @pytest.mark.parametrize("key", [None, 123, 1.5, b"bytes-key", ["key"]])
    def testRejectsNonStringKeys(self, key):
        with pytest.raises(InvalidKeyError, match="must be a string"):
            validateKey(key)

    def testCustomMaxLength(self):
        validateKey("a" * 10, maxLength=10)
        with pytest.raises(InvalidKeyError):
            validateKey("a" * 11, maxLength=10)


class TestValidateKeyMatchesMemcachedDriver:
    """Keys accepted here must pass pymemcache own key check and vice versa, dood!"""

    @pytest.mark.parametrize("key", VALID_KEYS)
    def testValidKeysPassDriverCheck(self, key):
        validateKey(key)
        assert check_key_helper(key, allow_unicode_keys=True) == key.encode("utf-8")

    @pytest.mark.parametrize("key", INVALID_KEYS)
    def testInvalidKeysFailDriverCheck(self, key):
        with pytest.raises(InvalidKeyError):
            validateKey(key)
        with pytest.raises(MemcacheIllegalInputError):
            check_key_helper(key, allow_unicode_keys=True)
