"""Exception types raised by sensitive-filter."""

from typing import Optional


class SensitiveError(Exception):
    """Base class for all sensitive-filter errors."""


class CacheError(SensitiveError):
    """Raised when the trie cache cannot be resolved, saved or cleared."""


class FileReadError(SensitiveError):
    """Raised when a word-list file cannot be opened for reading.

    Attributes:
        path: The file that could not be read.
    """

    def __init__(self, path: str, message: Optional[str] = None) -> None:
        self.path = str(path)
        super().__init__(message or f"read file [{self.path}] failed")
