"""
Shared fixtures for structcache.cache tests.

All fixtures work on the in-process DictBackend driven by a fake clock, so
TTL behaviour can be checked without sleeping.
"""

import pytest

from structcache.cache.backends.memory import DictBackend
from structcache.cache.client import ScalarCacheClient
from structcache.cache.hash_engine import HashEngine
from structcache.cache.list_engine import ListEngine
from structcache.cache.memcached_wrapper import MemcachedWrapper


class FakeClock:
    """Manually advanced clock for DictBackend."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fakeClock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def dictBackend(fakeClock) -> DictBackend:
    return DictBackend(timeFunc=fakeClock)


@pytest.fixture
def scalarClient(dictBackend) -> ScalarCacheClient:
    return ScalarCacheClient(dictBackend)


@pytest.fixture
def hashEngine(scalarClient) -> HashEngine:
    return HashEngine(scalarClient)


@pytest.fixture
def listEngine(scalarClient) -> ListEngine:
    return ListEngine(scalarClient)


@pytest.fixture
def cache(dictBackend) -> MemcachedWrapper:
    """MemcachedWrapper over DictBackend."""
    return MemcachedWrapper(backend=dictBackend)
