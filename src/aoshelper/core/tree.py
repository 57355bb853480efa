"""Prefix tree of CLI command tokens.

Each edge is labelled with a single lowercase token. A node carries a
``CommandDetail`` when the token path leading to it is a complete command;
a node can be complete and still have children ("show ip" and
"show ip interface" are both valid commands).

Trees are built once by the normalizer and then frozen. Children mappings
of a frozen tree are read-only views.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from aoshelper.core.exceptions import TreeFrozenError
from aoshelper.models.command import CommandDetail


class PrefixNode:
    """One position in the command grammar after a sequence of tokens."""

    __slots__ = ("_children", "metadata", "_frozen")

    def __init__(self, metadata: CommandDetail | None = None) -> None:
        self._children: dict[str, PrefixNode] | Mapping[str, PrefixNode] = {}
        self.metadata = metadata
        self._frozen = False

    def __setattr__(self, name: str, value: object) -> None:
        if name != "_frozen" and getattr(self, "_frozen", False):
            raise TreeFrozenError(f"Cannot set {name!r} on a frozen command tree")
        object.__setattr__(self, name, value)

    def __repr__(self) -> str:
        return f"PrefixNode(children={len(self._children)}, complete={self.is_complete})"

    # ── Read access ──────────────────────────────────────────────

    @property
    def children(self) -> Mapping[str, PrefixNode]:
        return self._children

    @property
    def is_complete(self) -> bool:
        """True when the path to this node is a full command."""
        return self.metadata is not None

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, token: str) -> PrefixNode | None:
        """Return the child for an already-normalized token, if any."""
        return self._children.get(token)

    def resolve(self, tokens: Iterable[str]) -> PrefixNode | None:
        """Follow one edge per token; None as soon as an edge is missing.

        Tokens are lowercased here so callers can pass raw user input.
        """
        node: PrefixNode | None = self
        for token in tokens:
            node = node.get(token.lower())
            if node is None:
                return None
        return node

    def iter_commands(self, prefix: tuple[str, ...] = ()) -> Iterator[tuple[str, PrefixNode]]:
        """Yield ``(command, node)`` for every complete command, sorted depth-first."""
        if self.is_complete and prefix:
            yield " ".join(prefix), self
        for token in sorted(self._children):
            yield from self._children[token].iter_commands(prefix + (token,))

    def count(self) -> int:
        """Number of nodes in this subtree, including this one."""
        return 1 + sum(child.count() for child in self._children.values())

    def same_shape(self, other: PrefixNode) -> bool:
        """Deep equality over child keys and metadata presence."""
        if self.is_complete != other.is_complete:
            return False
        if self._children.keys() != other.children.keys():
            return False
        return all(child.same_shape(other.children[key]) for key, child in self._children.items())

    # ── Construction ─────────────────────────────────────────────

    def child(self, token: str) -> PrefixNode:
        """Return the child for ``token``, creating it if absent.

        Existing children are reused so shared prefixes never lose the
        metadata already attached below them.
        """
        if self._frozen:
            raise TreeFrozenError(f"Cannot add {token!r} to a frozen command tree")
        node = self._children.get(token)
        if node is None:
            node = PrefixNode()
            self._children[token] = node  # type: ignore[index]
        return node

    def attach(self, metadata: CommandDetail) -> None:
        """Mark this node as a complete command. Metadata is never cleared."""
        self.metadata = metadata

    def freeze(self) -> PrefixNode:
        """Make this subtree read-only and return it."""
        if not self._frozen:
            for node in self._children.values():
                node.freeze()
            self._children = MappingProxyType(dict(self._children))
            self._frozen = True
        return self
