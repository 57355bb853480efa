"""Syntax highlighting for AOS configuration snippets."""

from __future__ import annotations

import click

from aoshelper.cli.main import AosContext, pass_context
from aoshelper.core.classifier import classify_line


@click.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@pass_context
def highlight(ctx: AosContext, source) -> None:
    """Print a configuration file (or stdin) with token colours.

        aoshelper highlight vcboot.cfg
        cat snippet.txt | aoshelper highlight
    """
    lines = source.read().splitlines()

    if ctx.json_mode:
        ctx.formatter.json([
            [{"text": segment, "category": category.value} for segment, category in classify_line(line)]
            for line in lines
        ])
        return

    for line in lines:
        ctx.formatter.highlighted(line)
