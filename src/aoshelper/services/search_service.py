"""Command library search — substring match over names and descriptions."""

from __future__ import annotations

from typing import Any

from aoshelper.models.command import CommandDetail
from aoshelper.services.index_service import CommandIndex

DEFAULT_LIMIT = 50


class SearchService:
    """Free-text lookup for the search and detail views."""

    def __init__(self, index: CommandIndex) -> None:
        self.index = index

    def search(self, query: str, limit: int = DEFAULT_LIMIT) -> list[CommandDetail]:
        """Commands whose name or description contains ``query``.

        Name matches are listed before description-only matches; an empty
        query returns the first ``limit`` commands.
        """
        query = query.strip()
        if not query:
            return self.index.commands()[:limit]

        name_hits: list[CommandDetail] = []
        desc_hits: list[CommandDetail] = []
        needle = query.lower()
        for detail in self.index.commands():
            if needle in detail.command.lower():
                name_hits.append(detail)
            elif detail.matches(query):
                desc_hits.append(detail)
        return (name_hits + desc_hits)[:limit]

    def search_json(self, query: str, limit: int = DEFAULT_LIMIT) -> list[dict[str, Any]]:
        return [{"command": d.command, "description": d.description} for d in self.search(query, limit)]

    def show(self, command: str) -> CommandDetail:
        """Full detail for one command. Raises ``NotFoundError``."""
        return self.index.get(command)
