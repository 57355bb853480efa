"""Command dictionary loading — bundled JSON asset or a user-supplied file."""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any

from aoshelper.core.exceptions import DictionaryLoadError

logger = logging.getLogger(__name__)

BUNDLED_DICTIONARY = "commands_r8.json"


def load_dictionary(path: Path | None = None) -> Any:
    """Read and deserialize the command dictionary.

    With no ``path`` the dictionary shipped in ``aoshelper.data`` is used.
    The result is the raw nested structure; shape checks belong to the
    normalizer.
    """
    try:
        if path is None:
            source = f"bundled {BUNDLED_DICTIONARY}"
            text = resources.files("aoshelper.data").joinpath(BUNDLED_DICTIONARY).read_text(encoding="utf-8")
        else:
            source = str(path)
            text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise DictionaryLoadError(f"Cannot read command dictionary: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DictionaryLoadError(f"Command dictionary {source} is not valid JSON: {e}") from e

    if isinstance(data, (dict, list)):
        logger.debug("Loaded command dictionary from %s (%d top-level entries)", source, len(data))
    return data
