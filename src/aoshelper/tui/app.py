"""Textual command browser — search the library and open command details."""

from __future__ import annotations

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Input, OptionList
from textual.widgets.option_list import Option

from aoshelper.services.index_service import CommandIndex
from aoshelper.services.search_service import SearchService
from aoshelper.tui.screens.detail import CommandDetailScreen


class CommandBrowser(App):
    """Search AOS R8 commands by name or description."""

    CSS = """
    #search {
        dock: top;
        margin: 1 1 0 1;
    }

    #results {
        height: 1fr;
        margin: 1;
        border: solid $primary;
    }
    """

    TITLE = "AOS R8 Command Library"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("escape", "focus_search", "Search"),
    ]

    def __init__(self, index: CommandIndex, initial_query: str = "", limit: int = 50, **kwargs) -> None:
        super().__init__(**kwargs)
        self.search_service = SearchService(index)
        self.initial_query = initial_query
        self.limit = limit

    def compose(self) -> ComposeResult:
        yield Header()
        yield Input(
            value=self.initial_query,
            placeholder="Search for an AOS R8 command...",
            id="search",
        )
        yield OptionList(id="results")
        yield Footer()

    def on_mount(self) -> None:
        self.refresh_results(self.initial_query)
        self.query_one("#search", Input).focus()

    def refresh_results(self, query: str) -> None:
        results = self.query_one("#results", OptionList)
        results.clear_options()
        for detail in self.search_service.search(query, self.limit):
            results.add_option(
                Option(f"[bold]{detail.command}[/bold]\n[dim]{detail.description}[/dim]", id=detail.command)
            )
        self.sub_title = f"{results.option_count} shown"

    def on_input_changed(self, event: Input.Changed) -> None:
        self.refresh_results(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        results = self.query_one("#results", OptionList)
        if results.option_count:
            results.focus()
            results.highlighted = 0

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option.id is None:
            return
        detail = self.search_service.show(event.option.id)
        self.push_screen(CommandDetailScreen(detail))

    def action_focus_search(self) -> None:
        self.query_one("#search", Input).focus()
