"""Logging setup for the CLI entry points.

All log output goes to stderr; stdout belongs to the stdio protocol.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "meteomcp-stderr"


def configure_logging(level: str = "INFO") -> None:
    """Install a stderr :class:`RichHandler` on the root logger.

    Calling it again only updates the level.
    """
    root = logging.getLogger()
    root.setLevel(level)
    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
