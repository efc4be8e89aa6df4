"""Console helpers shared by the CLI entry points."""

import functools
import sys
from typing import Callable, Optional

import click
from rich.console import Console
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


def info(message: str) -> None:
    """Print an informational message."""
    console.print(f"[cyan]{message}[/cyan]")


def success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]✓[/bold green] {message}")


def warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]{message}[/yellow]")


def error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[bold red]✗[/bold red] {message}")


def create_table(title: Optional[str] = None) -> Table:
    """Create a table with the common style."""
    return Table(title=title, show_header=True, header_style="bold magenta")


def print_table(table: Table) -> None:
    """Print a table to the console."""
    console.print(table)


def handle_errors(func: Callable) -> Callable:
    """
    Decorator for CLI commands: report unexpected exceptions and exit 1.

    SystemExit and click's own exceptions pass through untouched.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (click.ClickException, click.Abort, click.exceptions.Exit):
            raise
        except KeyboardInterrupt:
            warning("\nInterrupted")
            sys.exit(130)
        except Exception as e:
            error(str(e) or e.__class__.__name__)
            sys.exit(1)

    return wrapper
