"""Interactive session — prompt_toolkit line editor with command tree completion."""

from __future__ import annotations

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from aoshelper.cli.completer import CommandTreeCompleter
from aoshelper.cli.main import AosContext
from aoshelper.core.config import get_history_path
from aoshelper.core.exceptions import NotFoundError
from aoshelper.services.index_service import CommandIndex
from aoshelper.services.search_service import SearchService

console = Console()

PROMPT = "-> "
EXIT_WORDS = {"/quit", "/exit", "exit", "quit", "logout"}


def _show_help() -> None:
    """Display session help."""
    help_text = (
        "[bold cyan]TYPING[/bold cyan]\n"
        "  Tab / typing   — Complete the current word from the AOS R8 command tree\n"
        "  <line> ?       — List the valid next words with descriptions\n"
        "  Enter          — Check the line and show the matching command\n"
        "\n"
        "[bold cyan]SESSION COMMANDS[/bold cyan]\n"
        "  /search <text> — Search command names and descriptions\n"
        "  /show <cmd>    — Show the full reference for a command\n"
        "  /help          — This help message\n"
        "  /quit          — Exit"
    )
    console.print(Panel(help_text, title="aoshelper Help", border_style="cyan"))


def _list_next(ctx: AosContext, index: CommandIndex, line: str) -> None:
    """Switch-style '?' help: everything valid at this point of the line."""
    pairs = index.describe(line) if line.strip() else index.top_level()
    if not pairs:
        ctx.formatter.warning("No completions here.")
        return
    ctx.formatter.table(
        title="",
        columns=[("Token", "bold cyan"), ("Description", "")],
        rows=[[token, description] for token, description in pairs],
    )


def _route_session_command(ctx: AosContext, index: CommandIndex, text: str) -> None:
    """Route a slash command entered in the session."""
    parts = text.lstrip("/").split(None, 1)
    cmd_name = parts[0].lower() if parts else ""
    rest = parts[1] if len(parts) > 1 else ""

    if cmd_name == "help":
        _show_help()
        return

    svc = SearchService(index)
    if cmd_name == "search":
        results = svc.search(rest, limit=20)
        if not results:
            ctx.formatter.info(f'No commands match "{escape(rest)}".')
            return
        ctx.formatter.table(
            title="",
            columns=[("Command", "bold cyan"), ("Description", "")],
            rows=[[d.command, d.description] for d in results],
        )
        return

    if cmd_name == "show":
        try:
            ctx.formatter.detail(svc.show(rest))
        except NotFoundError as e:
            ctx.formatter.error(escape(str(e)))
        return

    ctx.formatter.error(f"Unknown session command: /{escape(cmd_name)}. Type /help for help.")


def _check_line(ctx: AosContext, index: CommandIndex, text: str) -> None:
    """Echo the line highlighted and report which command it starts with."""
    ctx.formatter.highlighted(text)
    detail, arguments = index.longest_command(text)
    if detail is None:
        if index.suggest(text + " ").tokens:
            ctx.formatter.warning("Incomplete command. Type '?' after the line to see what can follow.")
        else:
            ctx.formatter.warning("Unknown command.")
        return
    suffix = f" (arguments: {escape(' '.join(arguments))})" if arguments else ""
    ctx.formatter.info(f"[bold]{escape(detail.command)}[/bold] — {escape(detail.description)}{suffix}")


def launch_repl(ctx: AosContext) -> None:
    """Launch the interactive session."""
    console.print()
    console.print(
        Panel(
            "[bold cyan]aoshelper[/bold cyan] — OmniSwitch AOS R8 command assistant\n"
            "Type commands with completion, end a line with [bold]?[/bold] for help on the next word, "
            "or type [bold]/help[/bold].",
            border_style="cyan",
        )
    )
    console.print()

    # The index is complete before the completer exists
    index = ctx.get_index()
    if not index.enabled:
        ctx.formatter.warning(f"Command dictionary unavailable, completion is off: {index.error}")

    completer = CommandTreeCompleter(
        index,
        show_descriptions=ctx.display_setting("show_descriptions", True),
        max_suggestions=ctx.display_setting("max_suggestions", 0),
    )
    history = FileHistory(str(get_history_path()))
    session: PromptSession[str] = PromptSession(
        completer=completer,
        history=history,
        complete_while_typing=True,
        enable_history_search=False,
    )

    while True:
        try:
            text = session.prompt(PROMPT).strip()
            if not text:
                continue

            if text.lower() in EXIT_WORDS:
                raise EOFError()
            if text.endswith("?"):
                _list_next(ctx, index, text[:-1])
            elif text.startswith("/"):
                _route_session_command(ctx, index, text)
            else:
                _check_line(ctx, index, text)

            console.print()  # blank line between outputs

        except KeyboardInterrupt:
            continue
        except EOFError:
            console.print("\n[dim]Goodbye![/dim]")
            break
