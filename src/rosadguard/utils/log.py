"""Logging setup for the CLI."""

import logging

from rich.logging import RichHandler

from .output import console

_configured = False


def configure_logging(verbose: bool = False) -> None:
    """Route the package loggers through Rich once per process.

    Args:
        verbose: Log at DEBUG instead of WARNING
    """
    global _configured
    level = logging.DEBUG if verbose else logging.WARNING
    root = logging.getLogger("rosadguard")
    root.setLevel(level)
    if _configured:
        return
    _configured = True

    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.propagate = False

    for logger_name in ("httpx", "httpcore"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)
