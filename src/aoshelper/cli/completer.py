"""prompt_toolkit completer backed by the AOS command tree."""

from __future__ import annotations

from collections.abc import Iterable

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document

from aoshelper.core.suggest import apply_acceptance
from aoshelper.services.index_service import CommandIndex


class CommandTreeCompleter(Completer):
    """Completes the word under the cursor with valid next command tokens.

    Accepting a completion inserts the token and one trailing space, so the
    popup for the following word opens on the next keystroke.
    """

    def __init__(
        self,
        index: CommandIndex,
        show_descriptions: bool = True,
        max_suggestions: int = 0,
    ) -> None:
        self._index = index
        self._show_descriptions = show_descriptions
        self._max_suggestions = max_suggestions

    def get_completions(
        self, document: Document, complete_event: CompleteEvent
    ) -> Iterable[Completion]:
        line = document.current_line_before_cursor
        result = self._index.suggest(line, len(line))
        if not result.triggered:
            return

        pairs = self._index.describe(line, len(line)) if self._show_descriptions else [
            (token, "") for token in result.tokens
        ]
        if self._max_suggestions:
            pairs = pairs[: self._max_suggestions]

        for token, description in pairs:
            replacement, _ = apply_acceptance(token, result.span)
            yield Completion(
                replacement,
                start_position=-len(result.query),
                display=token,
                display_meta=description,
            )
