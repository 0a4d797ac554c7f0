"""Prometheus metrics for sensitive-filter."""

from sensitive_filter.metrics.collectors import (
    CACHE_OPERATIONS,
    MATCHES_FOUND,
    SCAN_LATENCY,
    TRIE_WORDS,
    WORDS_LOADED,
)

__all__ = [
    "CACHE_OPERATIONS",
    "MATCHES_FOUND",
    "SCAN_LATENCY",
    "TRIE_WORDS",
    "WORDS_LOADED",
]
