"""Entry point for ``python -m rosadguard``."""

from .cli.main import app

if __name__ == "__main__":
    app()
