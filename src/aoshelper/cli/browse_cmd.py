"""Textual command browser launcher."""

from __future__ import annotations

import click

from aoshelper.cli.main import AosContext, pass_context


@click.command()
@click.argument("query", nargs=-1)
@pass_context
def browse(ctx: AosContext, query: tuple[str, ...]) -> None:
    """Launch the full-screen command browser."""
    index = ctx.get_index()
    if not index.enabled:
        ctx.formatter.error(f"Command dictionary unavailable: {index.error}")
        raise SystemExit(1)

    try:
        from aoshelper.tui.app import CommandBrowser

        app = CommandBrowser(index=index, initial_query=" ".join(query))
        app.run()
    except ImportError as e:
        ctx.formatter.error(f"Browser requires textual: {e}")
