"""Command library CLI commands — search, show, stats."""

from __future__ import annotations

import click
from rich.markup import escape

from aoshelper.cli.main import AosContext, pass_context
from aoshelper.core.exceptions import NotFoundError


def _require_index(ctx: AosContext):
    index = ctx.get_index()
    if not index.enabled:
        ctx.formatter.error(f"Command dictionary unavailable: {index.error}")
        raise SystemExit(1)
    return index


@click.command()
@click.argument("query", nargs=-1)
@click.option("--limit", "-n", type=int, default=50, show_default=True, help="Maximum results.")
@pass_context
def search(ctx: AosContext, query: tuple[str, ...], limit: int) -> None:
    """Search command names and descriptions.

    Examples:
        aoshelper search vlan
        aoshelper search "routing table"
    """
    from aoshelper.services.search_service import SearchService

    svc = SearchService(_require_index(ctx))
    text = " ".join(query)

    if ctx.json_mode:
        ctx.formatter.json(svc.search_json(text, limit))
        return

    results = svc.search(text, limit)
    if not results:
        ctx.formatter.info(f'No commands match "{escape(text)}".')
        return

    ctx.formatter.table(
        title=f"Commands matching “{escape(text)}”" if text else "Commands",
        columns=[("Command", "bold cyan"), ("Description", "")],
        rows=[[d.command, d.description] for d in results],
    )


@click.command()
@click.argument("command", nargs=-1, required=True)
@pass_context
def show(ctx: AosContext, command: tuple[str, ...]) -> None:
    """Show the reference entry for a command.

        aoshelper show show vlan members
    """
    from aoshelper.services.search_service import SearchService

    svc = SearchService(_require_index(ctx))
    try:
        detail = svc.show(" ".join(command))
    except NotFoundError as e:
        ctx.formatter.error(escape(f"{e}. Try 'aoshelper search {command[-1]}'."))
        raise SystemExit(1)
    ctx.formatter.detail(detail)


@click.command()
@pass_context
def stats(ctx: AosContext) -> None:
    """Show command dictionary statistics."""
    index = ctx.get_index()
    data = index.stats()

    if ctx.json_mode:
        ctx.formatter.json(data)
        return

    if not index.enabled:
        ctx.formatter.error(f"Command dictionary unavailable: {index.error}")
        raise SystemExit(1)

    ctx.formatter.table(
        title="Command Dictionary",
        columns=[("Metric", "bold"), ("Value", "cyan")],
        rows=[
            ["Commands", str(data["commands"])],
            ["Tree nodes", str(data["nodes"])],
            ["Skipped entries", str(data["skipped"])],
        ],
    )
