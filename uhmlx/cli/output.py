"""Console output helpers for the UHMLX command line."""

from rich.console import Console
from rich.markup import escape

console = Console()
error_console = Console(stderr=True)


def print_success(message: str) -> None:
    console.print(f"[green]✓[/green] {escape(message)}", highlight=False)


def print_info(message: str) -> None:
    console.print(escape(message), highlight=False)


def print_error(message: str) -> None:
    error_console.print(f"[bold red]{escape(message)}[/bold red]", highlight=False)
