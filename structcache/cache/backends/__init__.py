"""
Flat scalar backends for structcache.
"""

from .abstract import AbstractScalarBackend
from .memcached import MemcachedBackend
from .memory import DictBackend

__all__ = [
    "AbstractScalarBackend",
    "DictBackend",
    "MemcachedBackend",
]
