"""
Redis-based cache for trie snapshots.

Lets several processes share one prebuilt trie. The snapshot is stored as
a JSON string without expiry.
"""

import json
import os
from typing import Optional

import redis

from sensitive_filter.cache.base import SensitiveCacheInterface, TrieSnapshot
from sensitive_filter.logging.setup import get_logger

logger = get_logger(__name__)

DEFAULT_REDIS_URL = "redis://localhost:6379/0"


class RedisCache(SensitiveCacheInterface):
    """Redis storage for the trie snapshot.

    Example:
        >>> import redis
        >>> cache = RedisCache(redis.Redis(host="localhost", port=6379))
        >>> cache.set_key("words")
        >>> cache.get() is None
        True
    """

    KEY_PREFIX = "sensitive_filter:trie:"

    def __init__(self, redis_client=None) -> None:
        """Initialize the Redis cache.

        Args:
            redis_client: Redis client instance (redis.Redis or compatible).
                Defaults to a client for SENSITIVE_REDIS_URL.
        """
        if redis_client is None:
            redis_client = redis.from_url(
                os.getenv("SENSITIVE_REDIS_URL", DEFAULT_REDIS_URL)
            )
        self._client = redis_client
        self.key = "default"

    def set_key(self, key: str) -> None:
        self.key = key

    def _redis_key(self) -> str:
        return f"{self.KEY_PREFIX}{self.key}"

    def get(self) -> Optional[TrieSnapshot]:
        try:
            data = self._client.get(self._redis_key())
        except redis.RedisError as e:
            logger.warning(
                "Failed to read trie cache from Redis",
                extra={"event": "cache_read_failed", "error": str(e)},
            )
            return None

        if data is None:
            return None

        # Handle bytes from Redis
        if isinstance(data, bytes):
            data = data.decode("utf-8")

        try:
            snapshot = json.loads(data)
        except json.JSONDecodeError:
            logger.warning(
                "Corrupt trie cache entry in Redis",
                extra={"event": "cache_read_failed", "key": self._redis_key()},
            )
            return None

        return snapshot if isinstance(snapshot, dict) else None

    def set(self, snapshot: TrieSnapshot) -> bool:
        try:
            return bool(
                self._client.set(self._redis_key(), json.dumps(snapshot, ensure_ascii=False))
            )
        except redis.RedisError as e:
            logger.error(
                "Failed to write trie cache to Redis",
                extra={"event": "cache_write_failed", "error": str(e)},
            )
            return False

    def clear(self) -> bool:
        try:
            self._client.delete(self._redis_key())
        except redis.RedisError as e:
            logger.error(
                "Failed to clear trie cache in Redis",
                extra={"event": "cache_clear_failed", "error": str(e)},
            )
            return False
        return True
