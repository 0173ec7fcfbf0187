"""CLI commands."""

from . import config, install, main

__all__ = ["config", "install", "main"]
