"""Core matching components for sensitive-filter."""

from sensitive_filter.core.engine import Sensitive
from sensitive_filter.core.redactor import redact
from sensitive_filter.core.scanner import MatchSpan, Scanner, scan
from sensitive_filter.core.trie import TrieNode, WordTrie

__all__ = [
    "Sensitive",
    "redact",
    "MatchSpan",
    "Scanner",
    "scan",
    "TrieNode",
    "WordTrie",
]
