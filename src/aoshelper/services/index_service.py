"""Process-wide command index — the frozen tree plus command lookups."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from aoshelper.core.dictionary import load_dictionary
from aoshelper.core.exceptions import DictionaryLoadError, NormalizationError, NotFoundError
from aoshelper.core.normalizer import Normalizer, Shape, tokenize
from aoshelper.core.suggest import SuggestionResult, describe, suggest
from aoshelper.core.tree import PrefixNode
from aoshelper.models.command import CommandDetail

logger = logging.getLogger(__name__)


class CommandIndex:
    """Owns the command tree for the lifetime of the process.

    Build it once before handing it to a completer. When the dictionary
    cannot be loaded the index is *disabled*: every query still runs but
    returns no tokens, so a broken asset never breaks keystroke handling.
    """

    def __init__(self, root: PrefixNode | None, skipped: list[str] | None = None, error: str = "") -> None:
        self.root = root
        self.skipped = skipped or []
        self.error = error
        self._commands: dict[str, CommandDetail] = {}
        if root is not None:
            self._commands = {command: node.metadata for command, node in root.iter_commands()}  # type: ignore[misc]

    @classmethod
    def from_raw(cls, raw: Any, shape: Shape | None = None) -> "CommandIndex":
        """Normalize already-deserialized data. Raises ``NormalizationError``."""
        normalizer = Normalizer()
        root = normalizer.build(raw, shape)
        return cls(root, skipped=normalizer.skipped)

    @classmethod
    def load(cls, path: Path | None = None) -> "CommandIndex":
        """Load and normalize a dictionary file, degrading to a disabled index on failure."""
        try:
            index = cls.from_raw(load_dictionary(path))
        except (DictionaryLoadError, NormalizationError) as e:
            logger.error("Command completion disabled: %s", e)
            return cls.disabled(str(e))
        logger.info("Command index ready: %d commands", len(index))
        return index

    @classmethod
    def disabled(cls, error: str = "") -> "CommandIndex":
        return cls(None, error=error)

    # ── Queries ──────────────────────────────────────────────────

    @property
    def enabled(self) -> bool:
        return self.root is not None

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, command: object) -> bool:
        return isinstance(command, str) and self.canonical(command) in self._commands

    @staticmethod
    def canonical(command: str) -> str:
        return " ".join(tokenize(command))

    def suggest(self, line_text: str, cursor_offset: int | None = None) -> SuggestionResult:
        """Suggestions for ``line_text`` with the cursor at the end by default."""
        if cursor_offset is None:
            cursor_offset = len(line_text)
        return suggest(self.root, line_text, cursor_offset)

    def describe(self, line_text: str, cursor_offset: int | None = None) -> list[tuple[str, str]]:
        if cursor_offset is None:
            cursor_offset = len(line_text)
        return describe(self.root, line_text, cursor_offset)

    def find(self, command: str) -> CommandDetail | None:
        """Detail for an exact command, case-insensitively; None if unknown."""
        return self._commands.get(self.canonical(command))

    def get(self, command: str) -> CommandDetail:
        detail = self.find(command)
        if detail is None:
            raise NotFoundError(f"Command not found: {command}")
        return detail

    def top_level(self) -> list[tuple[str, str]]:
        """First-word tokens with descriptions, for help on an empty line."""
        if self.root is None:
            return []
        return [
            (token, node.metadata.description if node.metadata else "")
            for token, node in sorted(self.root.children.items())
        ]

    def longest_command(self, line: str) -> tuple[CommandDetail | None, list[str]]:
        """Longest complete command at the start of ``line`` and the words after it.

        Arguments are not part of the tree, so "vlan 10 name Sales" matches
        the "vlan" command with ``["10", "name", "Sales"]`` left over.
        """
        words = line.split()
        best: CommandDetail | None = None
        consumed = 0
        node = self.root
        for position, word in enumerate(words):
            node = node.get(word.lower()) if node is not None else None
            if node is None:
                break
            if node.metadata is not None:
                best, consumed = node.metadata, position + 1
        return best, words[consumed:]

    def commands(self) -> list[CommandDetail]:
        """All complete commands, sorted by command string."""
        return list(self._commands.values())

    def node_count(self) -> int:
        return self.root.count() if self.root is not None else 0

    def stats(self) -> dict[str, Any]:
        return {
            "enabled": self.enabled,
            "commands": len(self),
            "nodes": self.node_count(),
            "skipped": len(self.skipped),
            "error": self.error,
        }
