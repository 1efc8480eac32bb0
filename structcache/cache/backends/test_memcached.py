"""
Tests for MemcachedBackend, dood!

pymemcache HashClient is replaced with a mock, so no server is needed.
"""

from unittest.mock import MagicMock, patch

import pytest

from structcache.cache.backends.memcached import (
    MAX_RELATIVE_EXPIRE,
    MemcachedBackend,
    parseServer,
    parseServers,
    toExpire,
)
from structcache.cache.exceptions import CacheConfigError, DeleteError, RetrievalError, StoreError


@pytest.fixture
def hashClientMock():
    with patch("structcache.cache.backends.memcached.HashClient") as clientClass:
        yield clientClass


class TestParseServers:
    @pytest.mark.parametrize(
        "server, expected",
        [
            ("127.0.0.1:11211", ("127.0.0.1", 11211)),
            ("cache.local:11212", ("cache.local", 11212)),
            ("cache.local", ("cache.local", 11211)),
            (" cache.local:1 ", ("cache.local", 1)),
            (("10.0.0.1", 11211), ("10.0.0.1", 11211)),
            (("10.0.0.1", "11300"), ("10.0.0.1", 11300)),
        ],
    )
    def testParseServer(self, server, expected):
        assert parseServer(server) == expected

    @pytest.mark.parametrize("server", ["", "   ", "host:port", None, 11211])
    def testParseInvalidServer(self, server):
        with pytest.raises(CacheConfigError):
            parseServer(server)

    def testParseSingleServerString(self):
        assert parseServers("a:1") == [("a", 1)]

    def testParseServerList(self):
        assert parseServers(["a:1", "b"]) == [("a", 1), ("b", 11211)]

    def testParseEmptyServerList(self):
        with pytest.raises(CacheConfigError):
            parseServers([])


class TestToExpire:
    @pytest.mark.parametrize("ttl, expected", [(1, 1), (0.5, 1), (10.2, 11), (MAX_RELATIVE_EXPIRE, MAX_RELATIVE_EXPIRE)])
    def testRelative(self, ttl, expected):
        assert toExpire(ttl) == expected

    def testLongTtlBecomesAbsoluteTimestamp(self):
        with patch("structcache.cache.backends.memcached.time.time", return_value=1_700_000_000.7):
            assert toExpire(MAX_RELATIVE_EXPIRE + 1) == 1_700_000_000 + MAX_RELATIVE_EXPIRE + 1


class TestMemcachedBackend:
    def testClientConfiguration(self, hashClientMock):
        backend = MemcachedBackend(["a:1", "b:2"], timeout=0.3, maxPoolSize=4)

        assert backend.servers == [("a", 1), ("b", 2)]
        hashClientMock.assert_called_once_with(
            [("a", 1), ("b", 2)],
            timeout=0.3,
            connect_timeout=0.3,
            retry_attempts=2,
            retry_timeout=1,
            dead_timeout=60,
            use_pooling=True,
            ignore_exc=False,
            allow_unicode_keys=True,
            max_pool_size=4,
        )

    def testSeparateConnectTimeout(self, hashClientMock):
        MemcachedBackend("a:1", timeout=0.3, connectTimeout=2)

        kwargs = hashClientMock.call_args.kwargs
        assert kwargs["connect_timeout"] == 2
        assert "max_pool_size" not in kwargs

    @pytest.mark.asyncio
    async def testGetDecodesBytes(self, hashClientMock):
        client: MagicMock = hashClientMock.return_value
        client.get.return_value = "Принни".encode("utf-8")
        backend = MemcachedBackend("a:1")

        assert await backend.rawGet("k") == "Принни"
        client.get.assert_called_once_with("k")

    @pytest.mark.asyncio
    async def testGetAbsent(self, hashClientMock):
        hashClientMock.return_value.get.return_value = None
        backend = MemcachedBackend("a:1")

        assert await backend.rawGet("k") is None

    @pytest.mark.asyncio
    async def testSetEncodesValue(self, hashClientMock):
        client: MagicMock = hashClientMock.return_value
        client.set.return_value = True
        backend = MemcachedBackend("a:1")

        assert await backend.rawSet("k", "значение", 1.5) is True
        client.set.assert_called_once_with("k", "значение".encode("utf-8"), 2, False)

    @pytest.mark.asyncio
    async def testSetNotStored(self, hashClientMock):
        hashClientMock.return_value.set.return_value = False
        backend = MemcachedBackend("a:1")

        assert await backend.rawSet("k", "v", 10) is False

    @pytest.mark.asyncio
    async def testDelete(self, hashClientMock):
        client: MagicMock = hashClientMock.return_value
        client.delete.return_value = True
        backend = MemcachedBackend("a:1")

        assert await backend.rawDelete("k") is True
        client.delete.assert_called_once_with("k", False)

    @pytest.mark.asyncio
    async def testErrorsAreWrapped(self, hashClientMock):
        client: MagicMock = hashClientMock.return_value
        error = ConnectionRefusedError("no server")
        client.get.side_effect = error
        client.set.side_effect = error
        client.delete.side_effect = error
        backend = MemcachedBackend("a:1")

        with pytest.raises(RetrievalError) as getInfo:
            await backend.rawGet("k")
        assert getInfo.value.originalError is error
        assert getInfo.value.key == "k"

        with pytest.raises(StoreError):
            await backend.rawSet("k", "v", 10)
        with pytest.raises(DeleteError):
            await backend.rawDelete("k")

    @pytest.mark.asyncio
    async def testClose(self, hashClientMock):
        backend = MemcachedBackend("a:1")

        await backend.close()
        hashClientMock.return_value.disconnect_all.assert_called_once_with()
