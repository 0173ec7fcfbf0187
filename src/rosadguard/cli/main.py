"""Main CLI application."""

import typer
from rich.console import Console

from .. import __version__
from ..utils import configure_logging
from ..utils.helpers import ordered_group
from . import config, install

console = Console()

app = typer.Typer(
    name="rosadguard",
    help="Install and upgrade AdGuard Home on MikroTik RouterOS",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    cls=ordered_group(["install", "status", "config"]),
)

app.command("install")(install.install)
app.command("status")(install.status)
app.add_typer(config.app, name="config")


def version_callback(value: bool) -> None:
    """Print version and exit.

    Args:
        value: Whether version flag was set
    """
    if value:
        console.print(f"rosadguard version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """rosadguard - AdGuard Home installer for MikroTik RouterOS.

    Get started:
        rosadguard config add     # Set up your router profile
        rosadguard install        # Install or upgrade the container
        rosadguard status         # Show what is deployed
    """
    configure_logging(verbose)


if __name__ == "__main__":
    app()
