"""Rich UI helpers for terminal output."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .models import PullRequest


console = Console()


def info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]ℹ[/blue] {escape(message)}")


def success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {escape(message)}")


def warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]⚠[/yellow] {escape(message)}")


def error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗[/red] {escape(message)}", style="red")


@contextmanager
def spinner(message: str) -> Iterator[None]:
    """Show a spinner while a remote call is in flight."""
    with console.status(escape(message)):
        yield


def show_pull_requests(repo: str, state: str, pull_requests: Sequence[PullRequest]) -> None:
    table = Table(title=f"{state} Pull Requests for {escape(repo)}", show_header=True, header_style="bold")
    table.add_column("ID", style="green", justify="right")
    table.add_column("Title")
    table.add_column("Branches", style="blue")
    for pr in pull_requests:
        table.add_row(f"#{pr.id}", escape(pr.title), escape(f"{pr.source} → {pr.destination}"))
    console.print()
    console.print(table)


def show_repositories(repos: Sequence[str]) -> None:
    console.print("[blue]Saved repositories:[/blue]")
    if not repos:
        console.print("  (none)")
    for index, repo in enumerate(repos, start=1):
        console.print(f"{index}. {escape(repo)}")
