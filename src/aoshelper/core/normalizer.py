"""Command dictionary normalizer — raw dictionary data to a frozen prefix tree.

Three raw shapes are accepted and all produce the same canonical tree:

FLAT     {"show ip interface": {...detail...}, "show vlan": "description"}
RECORDS  [{"command": "show ip interface", "description": "..."}, ...]
NESTED   {"show": {"ip": {"interface": "description"}, "vlan": None},
          "debug": {"_options": ["on", "off"]}}

In the nested shape a key may hold several words, each adding one level.
Keys starting with an underscore are reserved: ``_options`` lists leaf
tokens without metadata, ``_desc`` describes the node it sits in.

The dictionary is a large static dataset, so bad entries are skipped and
logged instead of failing the load.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from aoshelper.core.exceptions import NormalizationError
from aoshelper.core.tree import PrefixNode
from aoshelper.models.command import CommandDetail

logger = logging.getLogger(__name__)

OPTIONS_KEY = "_options"
DESC_KEY = "_desc"
_RESERVED_PREFIX = "_"

_DETAIL_FIELDS = frozenset(CommandDetail.model_fields)


class Shape(enum.Enum):
    FLAT = "flat"
    RECORDS = "records"
    NESTED = "nested"


def tokenize(command: str) -> list[str]:
    """Split a command string into lowercase tokens."""
    return [token.lower() for token in command.split()]


def is_detail_record(value: Any) -> bool:
    """True for a bare description, None, or a mapping of detail fields.

    A mapping must name at least one detail field. Other keys holding a
    string or None read as leaf commands of a nested level, so such a
    mapping is not a record; unknown keys with any other value are left
    for the model to ignore.
    """
    if value is None or isinstance(value, str):
        return True
    if not isinstance(value, Mapping) or not _DETAIL_FIELDS & value.keys():
        return False
    return not any(
        value[key] is None or isinstance(value[key], str) for key in value.keys() - _DETAIL_FIELDS
    )


def detect_shape(raw: Any) -> Shape:
    """Pick the raw shape of a deserialized dictionary."""
    if isinstance(raw, (list, tuple)):
        return Shape.RECORDS
    if not isinstance(raw, Mapping):
        raise NormalizationError(
            f"Command dictionary must be a mapping or a list, got {type(raw).__name__}"
        )
    flat = all(
        isinstance(key, str) and not key.startswith(_RESERVED_PREFIX) and is_detail_record(value)
        for key, value in raw.items()
    )
    return Shape.FLAT if flat else Shape.NESTED


class Normalizer:
    """Builds one prefix tree and remembers which entries it had to skip."""

    def __init__(self) -> None:
        self.skipped: list[str] = []

    def build(self, raw: Any, shape: Shape | None = None) -> PrefixNode:
        """Normalize ``raw`` into a frozen tree."""
        if shape is None:
            shape = detect_shape(raw)

        root = PrefixNode()
        if shape is Shape.RECORDS:
            if not isinstance(raw, (list, tuple)):
                raise NormalizationError("Record-shaped dictionary must be a list")
            for position, record in enumerate(raw):
                if not isinstance(record, Mapping):
                    self._skip(f"#{position}", "record is not a mapping")
                    continue
                self._add_command(root, record.get("command"), record)
        else:
            if not isinstance(raw, Mapping):
                raise NormalizationError(f"{shape.value.capitalize()} dictionary must be a mapping")
            if shape is Shape.FLAT:
                for command, record in raw.items():
                    self._add_command(root, command, record)
            else:
                self._add_level(root, raw, ())

        if self.skipped:
            logger.warning("Skipped %d malformed command dictionary entries", len(self.skipped))
        logger.debug("Built %s command tree with %d nodes", shape.value, root.count())
        return root.freeze()

    # ── Flat and record shapes ───────────────────────────────────

    def _add_command(self, root: PrefixNode, command: Any, record: Any) -> None:
        if not isinstance(command, str) or not command.strip():
            self._skip(repr(command), "empty or non-string command")
            return
        try:
            detail = CommandDetail.from_record(" ".join(command.split()), record)
        except (ValidationError, TypeError) as e:
            self._skip(command, f"invalid detail record: {e}")
            return

        node = root
        for token in tokenize(command):
            node = node.child(token)
        node.attach(detail)

    # ── Nested shape ─────────────────────────────────────────────

    def _add_level(self, node: PrefixNode, level: Mapping[Any, Any], path: tuple[str, ...]) -> None:
        for key, value in level.items():
            if not isinstance(key, str):
                self._skip(repr(key), "non-string key")
            elif key == OPTIONS_KEY:
                self._add_options(node, value, path)
            elif key == DESC_KEY:
                self._add_description(node, value, path)
            elif key.startswith(_RESERVED_PREFIX):
                logger.debug("Ignoring unknown reserved key %r under %r", key, " ".join(path))
            else:
                self._add_entry(node, key, value, path)

    def _add_entry(self, node: PrefixNode, key: str, value: Any, path: tuple[str, ...]) -> None:
        tokens = tokenize(key)
        if not tokens:
            self._skip(" ".join(path) or "<root>", "empty key")
            return
        sub_path = path + tuple(tokens)
        command = " ".join(sub_path)

        detail: CommandDetail | None = None
        nested = isinstance(value, Mapping)
        if not nested:
            if isinstance(value, (list, tuple)):
                self._skip(command, f"list value outside {OPTIONS_KEY!r}")
                return
            try:
                detail = CommandDetail.from_record(command, value)
            except (ValidationError, TypeError) as e:
                self._skip(command, f"invalid detail record: {e}")
                return

        target = node
        for token in tokens:
            target = target.child(token)
        if nested:
            self._add_level(target, value, sub_path)
        elif detail is not None:
            target.attach(detail)

    def _add_options(self, node: PrefixNode, options: Any, path: tuple[str, ...]) -> None:
        where = " ".join(path) or "<root>"
        if not isinstance(options, (list, tuple)):
            self._skip(where, f"{OPTIONS_KEY!r} is not a list")
            return
        for option in options:
            if not isinstance(option, str) or not option.strip():
                self._skip(where, f"invalid option {option!r}")
                continue
            target = node
            for token in tokenize(option):
                target = target.child(token)

    def _add_description(self, node: PrefixNode, value: Any, path: tuple[str, ...]) -> None:
        if not path or not isinstance(value, str):
            self._skip(" ".join(path) or "<root>", f"misplaced {DESC_KEY!r}")
            return
        node.attach(CommandDetail(command=" ".join(path), description=value))

    def _skip(self, entry: str, reason: str) -> None:
        logger.debug("Skipping dictionary entry %s: %s", entry, reason)
        self.skipped.append(entry)


def build_index(raw: Any, shape: Shape | None = None) -> PrefixNode:
    """Build the frozen command tree from a deserialized dictionary.

    Raises ``NormalizationError`` only when ``raw`` as a whole has the
    wrong type; individual bad entries are skipped.
    """
    return Normalizer().build(raw, shape)
