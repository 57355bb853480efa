"""Next-token suggestions for a partially typed command line.

The engine looks at the text before the cursor only. The trailing run of
non-whitespace characters is the word being typed; every word before it
must already be an edge in the command tree. Suggestions are the children
of the node reached that way whose token starts with the partial word.

    >>> result = suggest(root, "show ip is", 10)
    >>> result.tokens
    ['isis']
    >>> apply_acceptance("isis", result.span)
    Acceptance(replacement_text='isis ', new_cursor_offset=13)

A path the tree does not know is an ordinary state while typing, so it
produces an empty list rather than an error.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import NamedTuple

from aoshelper.core.tree import PrefixNode

_PARTIAL_RE = re.compile(r"\S+$")


class Span(NamedTuple):
    """Character range ``[start, end)`` of the word being completed."""

    start: int
    end: int


@dataclass(frozen=True)
class SuggestionResult:
    """Outcome of one suggestion query.

    ``triggered`` is False when the line has nothing but whitespace before
    the cursor; the host should not open a popup at all in that case.
    """

    triggered: bool
    tokens: list[str] = field(default_factory=list)
    query: str = ""
    start: int = 0
    end: int = 0

    @property
    def span(self) -> Span:
        return Span(self.start, self.end)


class Acceptance(NamedTuple):
    replacement_text: str
    new_cursor_offset: int


def _check_offset(line_text: str, cursor_offset: int) -> None:
    if not 0 <= cursor_offset <= len(line_text):
        raise ValueError(f"cursor offset {cursor_offset} outside line of length {len(line_text)}")


def split_line(line_text: str, cursor_offset: int) -> tuple[list[str], str, int]:
    """Split the text before the cursor into completed words and the partial word.

    Returns ``(completed, query, start)`` where ``start`` is the offset at
    which the partial word begins (the cursor itself when the partial word
    is empty).
    """
    _check_offset(line_text, cursor_offset)
    before = line_text[:cursor_offset]
    match = _PARTIAL_RE.search(before)
    start = match.start() if match else cursor_offset
    return before[:start].split(), before[start:], start


def candidates(node: PrefixNode, query: str) -> list[str]:
    """Child tokens of ``node`` starting with ``query``, sorted ascending."""
    needle = query.lower()
    return sorted(token for token in node.children if token.startswith(needle))


def _lookup(
    root: PrefixNode | None, line_text: str, cursor_offset: int
) -> tuple[SuggestionResult, PrefixNode | None]:
    _check_offset(line_text, cursor_offset)
    if not line_text[:cursor_offset].strip():
        return SuggestionResult(triggered=False), None

    completed, query, start = split_line(line_text, cursor_offset)
    node = root.resolve(completed) if root is not None else None
    tokens = candidates(node, query) if node is not None else []
    result = SuggestionResult(
        triggered=True,
        tokens=tokens,
        query=query,
        start=start,
        end=cursor_offset,
    )
    return result, node


def suggest(root: PrefixNode | None, line_text: str, cursor_offset: int) -> SuggestionResult:
    """Return the valid next tokens for the word under the cursor.

    ``root`` may be None when the dictionary failed to load; such queries
    still trigger but never produce tokens.
    """
    result, _ = _lookup(root, line_text, cursor_offset)
    return result


def describe(root: PrefixNode | None, line_text: str, cursor_offset: int) -> list[tuple[str, str]]:
    """Like ``suggest`` but pairs each token with its command description.

    Tokens that are only a prefix of longer commands get an empty
    description.
    """
    result, node = _lookup(root, line_text, cursor_offset)
    if node is None:
        return []
    pairs = []
    for token in result.tokens:
        detail = node.children[token].metadata
        pairs.append((token, detail.description if detail else ""))
    return pairs


def apply_acceptance(token: str, span: tuple[int, int]) -> Acceptance:
    """Replacement for accepting ``token`` over ``span``: the token plus one space."""
    start, _end = span
    replacement = f"{token} "
    return Acceptance(replacement, start + len(replacement))
