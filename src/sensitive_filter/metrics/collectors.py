"""Prometheus metrics collectors for sensitive-filter."""

from prometheus_client import Counter, Gauge, Histogram

# Word set metrics
WORDS_LOADED = Counter(
    "sensitive_words_loaded_total",
    "Total words inserted into the trie",
    ["source"],
)

TRIE_WORDS = Gauge(
    "sensitive_trie_words",
    "Number of distinct words currently in the trie",
    ["engine"],
)

# Scan metrics
MATCHES_FOUND = Counter(
    "sensitive_matches_total",
    "Total sensitive spans matched",
    ["operation"],
)

SCAN_LATENCY = Histogram(
    "sensitive_scan_duration_seconds",
    "Time spent scanning a text",
    ["operation"],
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5],
)

# Cache metrics
CACHE_OPERATIONS = Counter(
    "sensitive_cache_operations_total",
    "Trie cache operations",
    ["operation", "result"],
)
