"""
sensitive-filter: sensitive word detection and redaction

Finds banned words in Unicode text with a character trie, tolerating
"disturb" characters inserted inside a word to dodge the filter.
"""

__version__ = "1.0.0"

from sensitive_filter.core.engine import Sensitive
from sensitive_filter.core.scanner import MatchSpan
from sensitive_filter.core.trie import WordTrie
from sensitive_filter.config.settings import SensitiveConfig
from sensitive_filter.exceptions import CacheError, FileReadError, SensitiveError

__all__ = [
    "Sensitive",
    "MatchSpan",
    "WordTrie",
    "SensitiveConfig",
    "CacheError",
    "FileReadError",
    "SensitiveError",
]
