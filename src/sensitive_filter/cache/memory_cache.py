"""
In-process cache for trie snapshots.

Snapshots live in a module-level table shared by every MemoryCache, so
engines built in the same process reuse each other's tries. Used for
development and testing.
"""

import copy
import threading
from typing import Optional

from sensitive_filter.cache.base import SensitiveCacheInterface, TrieSnapshot

_store: dict[str, TrieSnapshot] = {}
_lock = threading.RLock()


class MemoryCache(SensitiveCacheInterface):
    """Thread-safe in-memory trie cache.

    Example:
        >>> cache = MemoryCache()
        >>> cache.set_key("words")
        >>> cache.set(WordTrie(["sb"]).snapshot())
        True
    """

    def __init__(self) -> None:
        self.key = "sensitive_filter:trie"

    def set_key(self, key: str) -> None:
        self.key = key

    def get(self) -> Optional[TrieSnapshot]:
        with _lock:
            snapshot = _store.get(self.key)
            return copy.deepcopy(snapshot) if snapshot is not None else None

    def set(self, snapshot: TrieSnapshot) -> bool:
        with _lock:
            _store[self.key] = copy.deepcopy(snapshot)
        return True

    def clear(self) -> bool:
        with _lock:
            _store.pop(self.key, None)
        return True

    @staticmethod
    def clear_all() -> None:
        """Drop every cached snapshot in this process."""
        with _lock:
            _store.clear()
