"""
Sensitive word engine.

Owns the word trie and the matching configuration, and wires the trie to
its cache backend and word sources.
"""

import hashlib
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union

from sensitive_filter.cache.base import SensitiveCacheInterface, resolve_cache_class
from sensitive_filter.config.settings import (
    SensitiveConfig,
    parse_disturbs,
    validate_replace_code,
)
from sensitive_filter.core.redactor import DEFAULT_REPLACE_CODE, redact
from sensitive_filter.core.scanner import MatchSpan, Scanner
from sensitive_filter.core.trie import WordTrie
from sensitive_filter.exceptions import CacheError
from sensitive_filter.loaders.word_loader import iter_words, iter_words_from_file
from sensitive_filter.logging.setup import get_logger
from sensitive_filter.metrics.collectors import (
    CACHE_OPERATIONS,
    MATCHES_FOUND,
    SCAN_LATENCY,
    TRIE_WORDS,
    WORDS_LOADED,
)

logger = get_logger(__name__)


def default_cache_key(cls: type) -> str:
    """Stable cache key derived from the engine class identity."""
    name = f"{cls.__module__}.{cls.__qualname__}"
    return hashlib.md5(name.encode("utf-8")).hexdigest()


class Sensitive:
    """Detects and redacts sensitive words in text.

    Matching tolerates configured disturb characters placed inside a word,
    so with ``*`` as a disturb, "s*b" still matches the word "sb" and the
    whole "s*b" is redacted.

    The engine does no internal locking. Hosts that mutate the word set
    while other threads search must serialize those calls.

    Example:
        >>> s = Sensitive({"words": ["笨蛋", "sb"]})
        >>> s.search("你是笨蛋大sb嘛")
        ['笨蛋', 'sb']
        >>> s.filter("你是笨蛋大sb嘛")
        '你是**大**嘛'
    """

    def __init__(
        self,
        config: Union[SensitiveConfig, Mapping[str, Any], None] = None,
        name: str = "default",
    ) -> None:
        """Build the engine, restoring the trie from cache when possible.

        Args:
            config: Engine configuration, as a SensitiveConfig or a mapping
                with the same keys.
            name: Label for this engine's metrics. Engines sharing a name
                overwrite each other's trie size gauge.

        Raises:
            CacheError: If the cache class cannot be resolved, does not
                implement SensitiveCacheInterface, or the initial save fails.
            FileReadError: If a configured word-list file cannot be read.
        """
        if not isinstance(config, SensitiveConfig):
            config = SensitiveConfig.from_dict(config)

        self.config = config
        self.name = name
        self._trie_words = TRIE_WORDS.labels(engine=name)
        self._replace_code = DEFAULT_REPLACE_CODE
        self._disturbs: frozenset[str] = frozenset()
        self._trie = WordTrie()
        self._use_cache = bool(config.cache)
        self._cache: Optional[SensitiveCacheInterface] = None

        if config.replace_code is not None:
            self.configure_replacement(config.replace_code)

        if config.disturbs is not None:
            self.configure_disturbs(config.disturbs)

        if self._use_cache:
            cache_cls = resolve_cache_class(config.cache_class)
            cache = cache_cls()
            cache.set_key(config.cache_key or default_cache_key(type(self)))
            self._cache = cache

            if self._load_from_cache():
                return

        self.reset_from_config()
        self.save_to_cache()

    def _load_from_cache(self) -> bool:
        snapshot = self._cache.get()
        if not snapshot:
            CACHE_OPERATIONS.labels(operation="get", result="miss").inc()
            logger.info("Trie cache miss", extra={"event": "cache_miss"})
            return False

        try:
            self._trie.restore(snapshot)
        except (ValueError, TypeError) as e:
            CACHE_OPERATIONS.labels(operation="get", result="invalid").inc()
            logger.warning(
                "Ignoring invalid trie cache entry",
                extra={"event": "cache_invalid", "error": str(e)},
            )
            return False

        CACHE_OPERATIONS.labels(operation="get", result="hit").inc()
        self._trie_words.set(len(self._trie))
        logger.info(
            "Trie restored from cache",
            extra={"event": "cache_hit", "words": len(self._trie)},
        )
        return True

    @property
    def trie(self) -> WordTrie:
        """The owned word trie."""
        return self._trie

    @property
    def replace_code(self) -> str:
        """Current replacement unit."""
        return self._replace_code

    @property
    def disturbs(self) -> frozenset[str]:
        """Current disturb characters."""
        return self._disturbs

    @property
    def cache_enabled(self) -> bool:
        """Whether a cache backend is in use."""
        return self._use_cache

    def configure_replacement(self, replace_code: str) -> "Sensitive":
        """Set the replacement unit used by :meth:`filter`.

        Raises:
            ValueError: If ``replace_code`` is empty or not a string.
        """
        self._replace_code = validate_replace_code(replace_code)
        return self

    def configure_disturbs(self, disturbs: Iterable[str] = ()) -> "Sensitive":
        """Set the characters skipped while matching.

        Raises:
            ValueError: If an entry is longer than one character.
        """
        self._disturbs = frozenset(parse_disturbs(disturbs) or ())
        return self

    def save_to_cache(self) -> bool:
        """Persist the current trie to the cache.

        Returns:
            True when saved, False when caching is disabled.

        Raises:
            CacheError: If the cache backend reports failure.
        """
        if not self._use_cache:
            return False

        if not self._cache.set(self._trie.snapshot()):
            CACHE_OPERATIONS.labels(operation="set", result="error").inc()
            raise CacheError("save cache failed")

        CACHE_OPERATIONS.labels(operation="set", result="ok").inc()
        logger.info(
            "Trie saved to cache",
            extra={"event": "cache_saved", "words": len(self._trie)},
        )
        return True

    def clear_cache(self) -> bool:
        """Remove the cached trie. The in-memory trie is untouched.

        Returns:
            True when cleared, False when caching is disabled.

        Raises:
            CacheError: If the cache backend reports failure.
        """
        if not self._use_cache:
            return False

        if not self._cache.clear():
            CACHE_OPERATIONS.labels(operation="clear", result="error").inc()
            raise CacheError("clear cache failed")

        CACHE_OPERATIONS.labels(operation="clear", result="ok").inc()
        logger.info("Trie cache cleared", extra={"event": "cache_cleared"})
        return True

    def reset_from_config(self) -> "Sensitive":
        """Rebuild the trie from the configured words, then files.

        Raises:
            FileReadError: If a configured file cannot be read. Words loaded
                before the failing file stay in the trie.
        """
        self.clear_trie()

        if self.config.words is not None:
            self.add_words(self.config.words)

        for path in self.config.files:
            self.add_words_from_file(path)

        logger.info(
            "Trie rebuilt from configuration",
            extra={"event": "trie_reset", "words": len(self._trie)},
        )
        return self

    def clear_trie(self) -> "Sensitive":
        """Forget every registered word."""
        self._trie.clear()
        self._trie_words.set(0)
        return self

    def add_words(self, words: Iterable[str]) -> "Sensitive":
        """Register words without clearing existing ones."""
        added = self._trie.insert_many(iter_words(words))
        self._record_added(added, "list")
        return self

    def add_words_from_file(self, path: Path | str) -> "Sensitive":
        """Register every line of a word-list file.

        Raises:
            FileReadError: If the file cannot be opened. Nothing from the
                file is inserted in that case.
        """
        added = self._trie.insert_many(iter_words_from_file(path))
        self._record_added(added, "file")
        logger.debug(
            "Words loaded from file",
            extra={"event": "words_loaded", "path": str(path), "added": added},
        )
        return self

    def _record_added(self, added: int, source: str) -> None:
        if added:
            WORDS_LOADED.labels(source=source).inc(added)
        self._trie_words.set(len(self._trie))

    def scan(self, text: str) -> list[MatchSpan]:
        """Return the sensitive spans in ``text``, left to right."""
        return Scanner(self._trie, self._disturbs).scan(text)

    def search(self, text: str) -> list[str]:
        """Return the sensitive substrings of ``text``, left to right.

        Each result is the literal slice of ``text``, disturbs included.
        """
        with SCAN_LATENCY.labels(operation="search").time():
            spans = self.scan(text)
        if spans:
            MATCHES_FOUND.labels(operation="search").inc(len(spans))
        return [span.extract(text) for span in spans]

    def contains(self, text: str) -> bool:
        """Whether ``text`` holds at least one sensitive word."""
        return next(Scanner(self._trie, self._disturbs).iter_spans(text), None) is not None

    def filter(self, text: str) -> str:
        """Redact every sensitive span of ``text``.

        Each matched character becomes one copy of the replacement unit.
        Text without matches is returned unchanged.
        """
        with SCAN_LATENCY.labels(operation="filter").time():
            spans = self.scan(text)
        if not spans:
            return text

        MATCHES_FOUND.labels(operation="filter").inc(len(spans))
        logger.debug(
            "Sensitive words redacted",
            extra={"event": "text_filtered", "matches": len(spans)},
        )
        return redact(text, spans, self._replace_code)
