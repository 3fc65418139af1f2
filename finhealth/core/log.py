"""Logging setup for command-line use."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str | int = "WARNING", console: Console | None = None) -> None:
    """Route finhealth logs through a rich handler on stderr."""
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root = logging.getLogger("finhealth")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)
    root.propagate = False
