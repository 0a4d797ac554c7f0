"""Redaction of matched spans."""

from typing import Iterable

from sensitive_filter.core.scanner import MatchSpan

DEFAULT_REPLACE_CODE = "*"


def redact(
    text: str,
    spans: Iterable[MatchSpan],
    replace_code: str = DEFAULT_REPLACE_CODE,
) -> str:
    """Replace each span with ``replace_code`` repeated once per character.

    Characters outside the spans are kept as-is. Spans must be ordered and
    non-overlapping, as produced by the scanner.

    Args:
        text: Original text.
        spans: Match spans over ``text``.
        replace_code: Replacement unit. A two-character unit doubles the
            width of the redacted run.

    Returns:
        The redacted text, or ``text`` itself when there are no spans.
    """
    parts: list[str] = []
    cursor = 0

    for span in spans:
        parts.append(text[cursor:span.start])
        parts.append(replace_code * span.length)
        cursor = span.end

    if not parts:
        return text

    parts.append(text[cursor:])
    return "".join(parts)
