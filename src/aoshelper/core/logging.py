"""Logging setup — Rich console output on stderr, optional plain log file."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def configure_logging(level: str = "WARNING", log_file: str = "") -> None:
    """Configure the ``aoshelper`` logger hierarchy.

    Console output goes through ``RichHandler`` on stderr so it never
    interleaves with completions written to stdout. When ``log_file`` is
    set, records are also appended to that file.
    """
    level = level.upper()
    root = logging.getLogger("aoshelper")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    console = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    console.setLevel(level)
    root.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT))
        file_handler.setLevel(level)
        root.addHandler(file_handler)

    root.setLevel(level)
