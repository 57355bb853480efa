"""Root CLI group — entry point for all aoshelper commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

from aoshelper import __version__
from aoshelper.output.formatter import OutputFormatter


class AosContext:
    """Shared context passed through Click commands."""

    def __init__(
        self,
        json_mode: bool = False,
        dictionary_path: Path | None = None,
        config: dict[str, Any] | None = None,
    ) -> None:
        self.json_mode = json_mode
        self.formatter = OutputFormatter(json_mode=json_mode)
        self.dictionary_path = dictionary_path
        self.config = config or {}
        self._index = None

    def get_index(self):
        """Build the command index on first call and keep it for the process."""
        if self._index is None:
            from aoshelper.core.config import get_dictionary_path
            from aoshelper.services.index_service import CommandIndex

            path = self.dictionary_path or get_dictionary_path(self.config)
            self._index = CommandIndex.load(path)
        return self._index

    def display_setting(self, key: str, default: Any = None) -> Any:
        return self.config.get("display", {}).get(key, default)


pass_context = click.make_pass_decorator(AosContext, ensure=True)


@click.group(invoke_without_command=True)
@click.option("--json", "json_mode", is_flag=True, help="Output JSON for scripts.")
@click.option(
    "--dictionary",
    "dictionary_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Command dictionary JSON file (defaults to the bundled AOS R8 dictionary).",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug details to stderr.")
@click.version_option(__version__, prog_name="aoshelper")
@click.pass_context
def cli(ctx: click.Context, json_mode: bool, dictionary_path: Path | None, verbose: bool) -> None:
    """aoshelper — OmniSwitch AOS R8 command completion and reference.

    Run without a subcommand to launch the interactive session.
    """
    from aoshelper.core.config import load_config
    from aoshelper.core.exceptions import ConfigError
    from aoshelper.core.logging import configure_logging

    try:
        config = load_config()
    except ConfigError as e:
        click.echo(f"Warning: {e}; using defaults.", err=True)
        config = {}

    log_settings = config.get("logging", {})
    configure_logging(
        level="DEBUG" if verbose else log_settings.get("level", "WARNING"),
        log_file=log_settings.get("file", ""),
    )

    ctx.ensure_object(AosContext)
    ctx.obj = AosContext(json_mode=json_mode, dictionary_path=dictionary_path, config=config)

    if ctx.invoked_subcommand is None:
        # No subcommand → launch interactive session
        from aoshelper.cli.repl import launch_repl
        launch_repl(ctx.obj)


# ── Register subcommands ──────────────────────────────────────────

from aoshelper.cli.complete_cmd import complete
cli.add_command(complete)

from aoshelper.cli.library import search, show, stats
cli.add_command(search)
cli.add_command(show)
cli.add_command(stats)

from aoshelper.cli.highlight import highlight
cli.add_command(highlight)

from aoshelper.cli.browse_cmd import browse
cli.add_command(browse)


def main() -> None:
    cli()
