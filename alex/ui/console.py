"""Rich console wrapper and formatting utilities."""

from typing import Optional

from rich.console import Console
from rich.table import Table

# Global console instance
console = Console()


def print_info(message: str, title: Optional[str] = None) -> None:
    """
    Print info message.

    Args:
        message: Info message
        title: Optional title
    """
    if title:
        console.print(f"[cyan][bold]{title}:[/bold][/cyan] {message}")
    else:
        console.print(f"[cyan]{message}[/cyan]")


def print_warning(message: str, title: Optional[str] = None) -> None:
    """
    Print warning message.

    Args:
        message: Warning message
        title: Optional title
    """
    if title:
        console.print(f"[yellow][bold]{title}:[/bold][/yellow] {message}")
    else:
        console.print(f"[yellow]⚠ {message}[/yellow]")


def print_error(message: str, title: Optional[str] = None) -> None:
    """
    Print error message.

    Args:
        message: Error message
        title: Optional title
    """
    if title:
        console.print(f"[red][bold]{title}:[/bold][/red] {message}")
    else:
        console.print(f"[red]✗ {message}[/red]")


def create_table(title: str, headers: list[str]) -> Table:
    """
    Create a Rich table.

    Args:
        title: Table title
        headers: Column headers

    Returns:
        Table instance
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    for header in headers:
        table.add_column(header)
    return table


def cls() -> None:
    """Clear the console screen. Usable anywhere, inside a session or not."""
    console.clear()
