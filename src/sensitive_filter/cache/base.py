"""
Cache contract for persisted tries.

A cache stores one trie snapshot under a key chosen by the engine. Backends
report failures by returning False from :meth:`set` / :meth:`clear`; the
engine turns that into :class:`~sensitive_filter.exceptions.CacheError`.
"""

import importlib
from abc import ABC, abstractmethod
from typing import Any, Optional, Union

from sensitive_filter.exceptions import CacheError

TrieSnapshot = dict[str, Any]


class SensitiveCacheInterface(ABC):
    """Persistence contract for trie snapshots."""

    @abstractmethod
    def set_key(self, key: str) -> None:
        """Set the key the snapshot is stored under."""

    @abstractmethod
    def get(self) -> Optional[TrieSnapshot]:
        """Return the stored snapshot, or None if absent."""

    @abstractmethod
    def set(self, snapshot: TrieSnapshot) -> bool:
        """Store a snapshot. Returns True on success."""

    @abstractmethod
    def clear(self) -> bool:
        """Remove the stored snapshot. Returns True on success."""


def _import_class(identifier: str) -> Optional[type]:
    if ":" in identifier:
        module_name, _, attr = identifier.partition(":")
    else:
        module_name, _, attr = identifier.rpartition(".")

    if not module_name or not attr:
        return None

    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None

    cls = getattr(module, attr, None)
    return cls if isinstance(cls, type) else None


def resolve_cache_class(identifier: Union[str, type, None]) -> type:
    """Resolve a cache class from a class object or import string.

    Args:
        identifier: A class, a dotted path (``pkg.mod.Class``), a
            ``pkg.mod:Class`` path, or None for the default FileCache.

    Returns:
        The cache class.

    Raises:
        CacheError: If the class cannot be found or does not implement
            :class:`SensitiveCacheInterface`.
    """
    if identifier is None:
        from sensitive_filter.cache.file_cache import FileCache

        return FileCache

    cls = identifier if isinstance(identifier, type) else _import_class(str(identifier))
    if cls is None:
        raise CacheError("cache class not exists")

    if not issubclass(cls, SensitiveCacheInterface):
        raise CacheError("cache not implement SensitiveCacheInterface")

    return cls
