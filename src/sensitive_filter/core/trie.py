"""
Prefix tree holding the sensitive word set.

Each node keeps its children and its end-of-word flag in separate fields,
so a word may be a strict prefix of another ("ab" and "abc") without one
overwriting the other.

Snapshots are a flat node table rather than nested dicts, so words of any
length survive copying and JSON encoding:

    {"nodes": [
        {"is_word": false, "children": {"a": 1}},
        {"is_word": false, "children": {"b": 2}},
        {"is_word": true, "children": {}}
    ]}

Node 0 is the root. Every other node is referenced by exactly one parent,
and always from a lower index.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Optional

# Characters trimmed from both ends of a word before insertion
STRIP_CHARS = " \t\n\r\0\x0b'\"`"


def normalize_word(word: str) -> str:
    """Trim whitespace and quote characters surrounding a word."""
    return word.strip(STRIP_CHARS)


@dataclass(eq=False, repr=False)
class TrieNode:
    """A single trie node.

    Attributes:
        children: Mapping from character to child node.
        is_word: Whether the path ending here spells a complete word.
    """

    children: dict[str, "TrieNode"] = field(default_factory=dict)
    is_word: bool = False

    def child(self, char: str) -> Optional["TrieNode"]:
        """Return the child for ``char``, or None."""
        return self.children.get(char)


def _parse_nodes(snapshot: Any) -> list[TrieNode]:
    """Rebuild the node list of a snapshot, validating its shape."""
    if not isinstance(snapshot, dict):
        raise ValueError(f"Invalid trie snapshot: expected dict, got {type(snapshot).__name__}")

    entries = snapshot.get("nodes")
    if not isinstance(entries, list) or not entries:
        raise ValueError("Invalid trie snapshot: missing node table")

    nodes = [TrieNode() for _ in entries]
    referenced = [False] * len(entries)

    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"Invalid trie node {index}: expected dict, got {type(entry).__name__}")

        children = entry.get("children", {})
        if not isinstance(children, dict):
            raise ValueError(f"Invalid trie node {index}: children must be a dict")

        node = nodes[index]
        node.is_word = bool(entry.get("is_word", False))
        for char, child_index in children.items():
            if not isinstance(char, str) or len(char) != 1:
                raise ValueError(f"Invalid trie edge label: {char!r}")
            if (
                isinstance(child_index, bool)
                or not isinstance(child_index, int)
                or not index < child_index < len(entries)
                or referenced[child_index]
            ):
                raise ValueError(f"Invalid trie child index {child_index!r} at node {index}")
            referenced[child_index] = True
            node.children[char] = nodes[child_index]

    if not all(referenced[1:]):
        raise ValueError("Invalid trie snapshot: unreachable nodes")

    if nodes[0].is_word:
        raise ValueError("Invalid trie snapshot: root cannot be a word")

    return nodes


class WordTrie:
    """Prefix tree over characters of the registered sensitive words.

    Example:
        >>> trie = WordTrie()
        >>> trie.insert("笨蛋")
        True
        >>> trie.insert(" 'sb' ")
        True
        >>> "sb" in trie
        True
        >>> len(trie)
        2
    """

    def __init__(self, words: Optional[Iterable[str]] = None) -> None:
        self._root = TrieNode()
        self._count = 0
        if words is not None:
            self.insert_many(words)

    @property
    def root(self) -> TrieNode:
        """The root node. Read-only use by the scanner."""
        return self._root

    def insert(self, word: str) -> bool:
        """Insert a word after trimming whitespace and quotes.

        Args:
            word: Raw word, possibly with surrounding whitespace or quotes.

        Returns:
            True if the word was new, False if it was empty after trimming
            or already present.
        """
        word = normalize_word(word)
        if not word:
            return False

        node = self._root
        for char in word:
            child = node.children.get(char)
            if child is None:
                child = TrieNode()
                node.children[char] = child
            node = child

        if node.is_word:
            return False

        node.is_word = True
        self._count += 1
        return True

    def insert_many(self, words: Iterable[str]) -> int:
        """Insert every word from an iterable.

        Returns:
            Number of newly added words.
        """
        return sum(1 for word in words if self.insert(word))

    def clear(self) -> None:
        """Forget every registered word."""
        self._root = TrieNode()
        self._count = 0

    def words(self) -> Iterator[str]:
        """Yield every registered word (depth-first order)."""
        stack: list[tuple[TrieNode, str]] = [(self._root, "")]
        while stack:
            node, prefix = stack.pop()
            if node.is_word:
                yield prefix
            for char in reversed(list(node.children)):
                stack.append((node.children[char], prefix + char))

    def snapshot(self) -> dict[str, Any]:
        """Return a detached, JSON-compatible node table of the trie.

        Nodes are numbered breadth-first with children in sorted order, so
        tries of the same shape give equal snapshots.
        """
        order = [self._root]
        entries = []
        for node in order:
            children = {}
            for char in sorted(node.children):
                children[char] = len(order)
                order.append(node.children[char])
            entries.append({"is_word": node.is_word, "children": children})
        return {"nodes": entries}

    def restore(self, snapshot: dict[str, Any]) -> None:
        """Replace the whole trie with a snapshot.

        The snapshot is copied, so later changes to it do not affect the trie.

        Raises:
            ValueError: If the snapshot is malformed. The trie is left
                unchanged in that case.
        """
        nodes = _parse_nodes(snapshot)
        self._root = nodes[0]
        self._count = sum(1 for node in nodes if node.is_word)

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.snapshot(), ensure_ascii=False)

    @classmethod
    def from_json(cls, json_str: str) -> "WordTrie":
        """Deserialize from JSON string."""
        trie = cls()
        trie.restore(json.loads(json_str))
        return trie

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False

        node: Optional[TrieNode] = self._root
        for char in normalize_word(word):
            node = node.child(char)
            if node is None:
                return False
        return node is not self._root and node.is_word

    def __len__(self) -> int:
        """Return number of registered words."""
        return self._count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WordTrie):
            return NotImplemented
        return self.snapshot() == other.snapshot()
