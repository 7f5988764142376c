# Logging setup for the fileenum command line.
# Library modules only create named loggers; handlers are attached here,
# once, by the cli.

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "fileenum-rich"


def configure_logging(verbose: bool, console: Optional[Console] = None) -> None:
    # Route log records to stderr through rich. Calling this again only
    # adjusts the level.
    level = logging.DEBUG if verbose else logging.WARNING
    root = logging.getLogger()
    root.setLevel(level)

    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
