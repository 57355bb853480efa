"""One-shot completion for a command line."""

from __future__ import annotations

import click
from rich.markup import escape

from aoshelper.cli.main import AosContext, pass_context


@click.command()
@click.argument("line", nargs=-1)
@click.option("--cursor", type=int, default=None, help="Cursor offset in LINE (defaults to the end).")
@pass_context
def complete(ctx: AosContext, line: tuple[str, ...], cursor: int | None) -> None:
    """Show valid next tokens for a partially typed command.

    A trailing space ends the last word, so quote the line to ask for the
    next level:

        aoshelper complete "show ip "
        aoshelper complete show ip is
    """
    text = " ".join(line)
    index = ctx.get_index()
    if cursor is not None and not 0 <= cursor <= len(text):
        ctx.formatter.error(f"--cursor must be between 0 and {len(text)}.")
        raise SystemExit(1)

    result = index.suggest(text, cursor)
    pairs = index.describe(text, cursor)

    if ctx.json_mode:
        ctx.formatter.json({
            "triggered": result.triggered,
            "query": result.query,
            "span": list(result.span),
            "tokens": result.tokens,
        })
        return

    if not result.triggered:
        ctx.formatter.info("Type a command to see completions.")
        return
    if not pairs:
        ctx.formatter.warning(f'No completions for "{escape(text)}".')
        return

    ctx.formatter.table(
        title="Completions",
        columns=[("Token", "bold cyan"), ("Description", "")],
        rows=[[token, description] for token, description in pairs],
    )
