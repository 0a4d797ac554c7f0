"""Word list loaders."""

from sensitive_filter.loaders.word_loader import (
    iter_words,
    iter_words_from_file,
    iter_words_from_files,
)

__all__ = [
    "iter_words",
    "iter_words_from_file",
    "iter_words_from_files",
]
