"""Detail screen for TUI drill-down navigation."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from aoshelper.models.command import CommandDetail
from aoshelper.output.formatter import detail_renderable


class DetailScreen(Screen):
    """Base detail screen with back navigation."""

    BINDINGS = [
        Binding("escape", "go_back", "Back"),
        Binding("q", "go_back", "Back"),
    ]

    def action_go_back(self) -> None:
        self.app.pop_screen()


class CommandDetailScreen(DetailScreen):
    """Full reference entry for one command."""

    def __init__(self, detail: CommandDetail, **kwargs) -> None:
        super().__init__(**kwargs)
        self.detail = detail

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        yield VerticalScroll(Static(id="command-detail-content"))
        yield Footer()

    def on_mount(self) -> None:
        self.title = self.detail.command
        self.query_one("#command-detail-content", Static).update(detail_renderable(self.detail))
