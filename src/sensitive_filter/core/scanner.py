"""
Sensitive word scanner.

Greedy, leftmost, longest-at-each-start search of a WordTrie over a text.
Disturb characters are skipped without advancing the trie, but they are
still counted in the match so the span covers the obfuscated text exactly.

Example:
    >>> trie = WordTrie(["sb"])
    >>> scan("你s*b", trie, {"*"})
    [MatchSpan(start=1, length=3)]
"""

from dataclasses import dataclass
from typing import AbstractSet, Iterator, Optional

from sensitive_filter.core.trie import WordTrie


@dataclass(frozen=True)
class MatchSpan:
    """A sensitive slice of the scanned text, in characters.

    Attributes:
        start: Offset of the first matched character.
        length: Number of matched characters, disturbs included.
    """

    start: int
    length: int

    @property
    def end(self) -> int:
        """Offset just past the last matched character."""
        return self.start + self.length

    def extract(self, text: str) -> str:
        """Return the matched slice of ``text``."""
        return text[self.start:self.end]


class Scanner:
    """Finds non-overlapping sensitive spans in text.

    The scanner only reads the trie; callers sharing a trie across threads
    must serialize writes against scans themselves.
    """

    def __init__(
        self,
        trie: WordTrie,
        disturbs: Optional[AbstractSet[str]] = None,
    ) -> None:
        """Initialize the scanner.

        Args:
            trie: Word set to search for.
            disturbs: Characters skipped (but counted) while matching.
        """
        self.trie = trie
        self.disturbs = frozenset(disturbs or ())

    def probe(self, text: str, begin: int) -> int:
        """Length of the longest word match starting at ``begin``, or 0.

        Walks forward past ``begin`` as long as characters are either
        disturbs or extend the current trie path. The last position where
        a complete word was reached wins, so a prefix word still matches
        when a longer extension fails to complete.
        """
        node = self.trie.root
        disturbs = self.disturbs
        consumed = 0
        best = 0

        for pos in range(begin, len(text)):
            char = text[pos]
            if char in disturbs:
                consumed += 1
                continue

            child = node.children.get(char)
            if child is None:
                break

            node = child
            consumed += 1
            if node.is_word:
                best = consumed

        return best

    def iter_spans(self, text: str) -> Iterator[MatchSpan]:
        """Yield match spans left to right, resuming after each match."""
        if not text or not self.trie.root.children:
            return

        i = 0
        length = len(text)
        while i < length:
            matched = self.probe(text, i)
            if matched > 0:
                yield MatchSpan(start=i, length=matched)
                i += matched
            else:
                i += 1

    def scan(self, text: str) -> list[MatchSpan]:
        """Return every match span in ``text``, in order."""
        return list(self.iter_spans(text))


def scan(
    text: str,
    trie: WordTrie,
    disturbs: Optional[AbstractSet[str]] = None,
) -> list[MatchSpan]:
    """Convenience wrapper: scan ``text`` for words in ``trie``."""
    return Scanner(trie, disturbs).scan(text)
