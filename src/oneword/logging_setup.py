# ABOUTME: Logging configuration for the oneword CLI.
# ABOUTME: Routes stdlib logging through Rich so log lines match the rest of the terminal output.

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "WARNING", console: Console | None = None) -> None:
    """Configure the root logger with a single RichHandler.

    A RichHandler installed by an earlier call is replaced, so repeated
    calls (one per CLI invocation in tests) do not duplicate output.

    Args:
        level: Logging level name, e.g. "DEBUG" or "INFO".
        console: Optional Rich console to log to. Defaults to stderr.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)

    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
