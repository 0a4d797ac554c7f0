"""
File-based cache for trie snapshots.

Each key maps to one JSON file in the cache directory. The directory comes
from SENSITIVE_CACHE_PATH, or ``./.sensitive_cache`` when unset.
"""

import json
import os
import re
from pathlib import Path
from typing import Optional

from sensitive_filter.cache.base import SensitiveCacheInterface, TrieSnapshot
from sensitive_filter.logging.setup import get_logger

logger = get_logger(__name__)

DEFAULT_CACHE_PATH = "./.sensitive_cache"

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class FileCache(SensitiveCacheInterface):
    """Stores the trie snapshot as JSON on local disk.

    Writes go to a temporary file that is renamed into place, so a reader
    never sees a half-written snapshot.
    """

    def __init__(self, cache_dir: Optional[Path | str] = None) -> None:
        """Initialize the file cache.

        Args:
            cache_dir: Directory for snapshot files. Defaults to env var
                SENSITIVE_CACHE_PATH or ./.sensitive_cache.
        """
        if cache_dir is None:
            cache_dir = os.getenv("SENSITIVE_CACHE_PATH", DEFAULT_CACHE_PATH)
        self.cache_dir = Path(cache_dir)
        self.key = "sensitive_filter"

    def set_key(self, key: str) -> None:
        self.key = key

    @property
    def path(self) -> Path:
        """Snapshot file for the current key."""
        return self.cache_dir / f"{_UNSAFE_KEY_CHARS.sub('_', self.key)}.json"

    def get(self) -> Optional[TrieSnapshot]:
        path = self.path
        if not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(
                "Unreadable trie cache file",
                extra={"event": "cache_read_failed", "path": str(path), "error": str(e)},
            )
            return None

        return data if isinstance(data, dict) else None

    def set(self, snapshot: TrieSnapshot) -> bool:
        path = self.path
        tmp_path = path.with_suffix(".tmp")
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(snapshot, f, ensure_ascii=False)
            os.replace(tmp_path, path)
        except OSError as e:
            logger.error(
                "Failed to write trie cache file",
                extra={"event": "cache_write_failed", "path": str(path), "error": str(e)},
            )
            return False
        return True

    def clear(self) -> bool:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(
                "Failed to remove trie cache file",
                extra={"event": "cache_clear_failed", "path": str(self.path), "error": str(e)},
            )
            return False
        return True
