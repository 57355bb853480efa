"""Dual-mode output — Rich for humans, JSON for scripts."""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from aoshelper.core.classifier import Category, classify_line
from aoshelper.models.command import CommandDetail

# Human output goes to stdout; in JSON mode, human messages go to stderr
_console = Console()
_err_console = Console(stderr=True)

CATEGORY_STYLES: dict[Category, str] = {
    Category.COMMENT: "dim italic",
    Category.IP_ADDRESS: "bright_cyan",
    Category.MAC_ADDRESS: "magenta",
    Category.NUMBER: "cyan",
    Category.STRING: "yellow",
    Category.COMMAND: "bold bright_magenta",
    Category.PARAMETER: "bright_blue",
    Category.CRITICAL: "bold red",
    Category.PROTOCOL: "green",
    Category.ACTION: "blue",
}


def highlight(line: str) -> Text:
    """Colour one configuration line by token category."""
    text = Text()
    for segment, category in classify_line(line):
        text.append(segment, style=CATEGORY_STYLES.get(category, ""))
    return text


def detail_renderable(detail: CommandDetail) -> Group:
    """Build the full reference view of a command."""
    parts: list[Any] = [
        Text(detail.command, style="bold cyan"),
        Text(detail.description),
        Text(""),
        Text("Syntax", style="bold"),
        highlight(detail.syntax or detail.command),
    ]

    params = detail.documented_parameters
    if params:
        table = Table(title="Parameters", show_header=True, header_style="bold cyan", title_justify="left")
        table.add_column("Parameter", style="bright_blue")
        table.add_column("Description")
        for p in params:
            table.add_row(p.name, p.description)
        parts += [Text(""), table]

    if detail.defaults and detail.defaults != "N/A":
        parts += [Text(""), Text("Defaults", style="bold"), Text(detail.defaults)]

    guidelines = detail.documented_guidelines
    if guidelines:
        parts += [Text(""), Text("Usage Guidelines", style="bold")]
        parts += [Text(f"  • {g}") for g in guidelines]

    if detail.examples:
        parts += [Text(""), Text("Examples", style="bold")]
        parts += [Text("  ").append_text(highlight(e)) for e in detail.examples]

    if detail.output_definitions:
        table = Table(title="Output Definitions", show_header=True, header_style="bold cyan", title_justify="left")
        table.add_column("Field", style="bright_blue")
        table.add_column("Description")
        for d in detail.output_definitions:
            table.add_row(d.field, d.description)
        parts += [Text(""), table]

    if detail.related_commands:
        parts += [Text(""), Text("Related Commands", style="bold")]
        parts += [Text(f"  {r.command} — {r.description}") for r in detail.related_commands]

    if detail.release_history:
        parts += [Text(""), Text(", ".join(detail.release_history), style="dim")]

    return Group(*parts)


class OutputFormatter:
    """Routes output to Rich (human) or JSON (script) depending on mode."""

    def __init__(self, json_mode: bool = False) -> None:
        self.json_mode = json_mode

    # ── JSON output ──────────────────────────────────────────────

    def json(self, data: Any, status: str = "success") -> None:
        """Print structured JSON to stdout."""
        envelope = {"status": status, "data": data}
        print(json.dumps(envelope, indent=2, default=str))

    def json_error(self, message: str, code: int = 1) -> None:
        """Print a JSON error envelope to stdout."""
        envelope = {"status": "error", "error": {"message": message, "code": code}}
        print(json.dumps(envelope, indent=2))

    # ── Human output ─────────────────────────────────────────────

    def warning(self, message: str) -> None:
        """Print a warning."""
        console = _err_console if self.json_mode else _console
        console.print(f"[yellow]![/yellow] {message}")

    def error(self, message: str) -> None:
        """Print an error message, as a JSON envelope in JSON mode."""
        if self.json_mode:
            self.json_error(message)
            return
        _console.print(f"[red]✗[/red] {message}")

    def info(self, message: str) -> None:
        """Print an info message."""
        if self.json_mode:
            return
        _console.print(f"[dim]ℹ[/dim] {message}")

    def table(
        self,
        title: str,
        columns: list[tuple[str, str]],
        rows: list[list[str]],
    ) -> None:
        """Print a table (Rich for humans, JSON for scripts).

        columns: list of (header, style) tuples
        rows: list of row data (strings)
        """
        if self.json_mode:
            self.json([dict(zip([c[0] for c in columns], r)) for r in rows])
            return

        table = Table(title=title, show_header=True, header_style="bold cyan")
        for header, style in columns:
            table.add_column(header, style=style)
        for row in rows:
            table.add_row(*row)
        _console.print(table)

    def detail(self, detail: CommandDetail) -> None:
        """Print the full reference entry for a command."""
        if self.json_mode:
            self.json(detail.model_dump())
            return
        _console.print(Panel(detail_renderable(detail), title=detail.command, border_style="cyan"))

    def highlighted(self, line: str) -> None:
        """Print one configuration line with token colours."""
        if self.json_mode:
            return
        _console.print(highlight(line))
