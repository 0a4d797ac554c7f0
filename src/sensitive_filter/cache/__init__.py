"""Trie cache backends for sensitive-filter."""

from sensitive_filter.cache.base import (
    SensitiveCacheInterface,
    TrieSnapshot,
    resolve_cache_class,
)
from sensitive_filter.cache.file_cache import FileCache
from sensitive_filter.cache.memory_cache import MemoryCache
from sensitive_filter.cache.redis_cache import RedisCache

__all__ = [
    "SensitiveCacheInterface",
    "TrieSnapshot",
    "resolve_cache_class",
    "FileCache",
    "MemoryCache",
    "RedisCache",
]
