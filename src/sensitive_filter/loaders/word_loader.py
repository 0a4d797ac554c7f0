"""Word sources feeding the trie.

Word-list files hold one word per line. Files are read lazily, line by
line, so large lists never need to fit in memory at once.
"""

from pathlib import Path
from typing import IO, Iterable, Iterator

from sensitive_filter.exceptions import FileReadError
from sensitive_filter.logging.setup import get_logger

logger = get_logger(__name__)


def iter_words(words: Iterable[str]) -> Iterator[str]:
    """Yield raw words from an in-memory collection, skipping non-strings."""
    for word in words:
        if isinstance(word, str):
            yield word


def _iter_lines(handle: IO[str], path: Path) -> Iterator[str]:
    with handle:
        try:
            yield from handle
        except UnicodeDecodeError as e:
            logger.warning(
                "Word list file is not valid text",
                extra={"event": "word_file_decode_failed", "path": str(path), "error": str(e)},
            )
            raise FileReadError(
                str(path), f"file [{path}] is not valid {handle.encoding}"
            ) from e


def iter_words_from_file(path: Path | str, encoding: str = "utf-8") -> Iterator[str]:
    """Open a word-list file and return a lazy iterator over its lines.

    The file is opened before this function returns, so an unreadable path
    fails here rather than on first iteration. Each call opens the file
    anew.

    Args:
        path: Path to a one-word-per-line file.
        encoding: Text encoding of the file.

    Returns:
        Iterator of raw lines (line endings included). The file is closed
        once the iterator is exhausted.

    Raises:
        FileReadError: If the file does not exist or cannot be opened. The
            iterator itself raises it if the content is not valid in
            ``encoding``.
    """
    path = Path(path)

    if not path.is_file():
        logger.warning(
            "Word list file not found",
            extra={"event": "word_file_missing", "path": str(path)},
        )
        raise FileReadError(str(path), f"file [{path}] not exists")

    try:
        handle = open(path, "r", encoding=encoding)
    except OSError as e:
        logger.warning(
            "Failed to open word list file",
            extra={"event": "word_file_read_failed", "path": str(path), "error": str(e)},
        )
        raise FileReadError(str(path)) from e

    return _iter_lines(handle, path)


def iter_words_from_files(paths: Iterable[Path | str]) -> Iterator[str]:
    """Chain the lines of several word-list files, in order.

    Each file is opened only when the previous one is exhausted, so words
    from earlier files are produced before a later unreadable file raises
    :class:`FileReadError`.
    """
    for path in paths:
        yield from iter_words_from_file(path)
