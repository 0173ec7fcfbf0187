"""Console output for rosadguard commands, rendered with Rich."""

from rich.console import Console
from rich.prompt import Confirm, Prompt
from rich.table import Table

console = Console()

# Container states and router flags, grouped by how healthy they look.
_STATE_STYLES = {
    "running": "green",
    "ready": "green",
    "enabled": "green",
    "extracting": "yellow",
    "stopping": "yellow",
    "stopped": "red",
    "absent": "red",
    "disabled": "red",
}


def print_error(msg: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {msg}")


def print_success(msg: str) -> None:
    console.print(f"[bold green]✓[/bold green] {msg}")


def print_warning(msg: str) -> None:
    console.print(f"[bold yellow]Warning:[/bold yellow] {msg}")


def print_info(msg: str) -> None:
    console.print(f"[cyan]{msg}[/cyan]")


def print_cancelled(msg: str = "Cancelled") -> None:
    console.print(f"[yellow]{msg}[/yellow]")


def styled_state(value: str) -> str:
    """Wrap a container state or on/off flag in its Rich colour markup.

    Args:
        value: State name such as ``running`` or ``extracting``, or
            ``enabled``/``disabled``.

    Returns:
        Markup string; unknown values are left unstyled.
    """
    style = _STATE_STYLES.get(value.lower())
    return f"[{style}]{value}[/{style}]" if style else value


def create_table(title: str, columns: list[tuple[str, str]]) -> Table:
    """Create a Rich table with one ``(name, style)`` pair per column."""
    table = Table(title=title, header_style="bold cyan")
    for col_name, col_style in columns:
        table.add_column(col_name, style=col_style)
    return table


def confirm(message: str, default: bool = False) -> bool:
    return Confirm.ask(message, default=default)


def prompt(message: str, default: str | None = None, password: bool = False) -> str:
    """Ask for a line of input; ``password`` hides what is typed."""
    if default is None:
        return Prompt.ask(message, password=password)
    return Prompt.ask(message, default=default, password=password)
