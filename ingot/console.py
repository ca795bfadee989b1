"""Terminal output primitives built on Rich.

Provides the small set of rendering helpers the CLI uses to report
progress and the final summary. No module outside this one talks to Rich
directly; tests replace ``CONSOLE`` to capture output.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

CONSOLE: Console = Console()


def ui_rule(title: str) -> None:
    """Render a horizontal rule with a section title."""
    CONSOLE.rule(title, style="bold blue")


def ui_info(message: str) -> None:
    """Display an informational message in cyan."""
    CONSOLE.print(f"[cyan]{escape(message)}[/cyan]")


def ui_success(message: str) -> None:
    """Display a success message with a green check mark."""
    CONSOLE.print(f"[green]✓ {escape(message)}[/green]")


def ui_warning(message: str) -> None:
    """Display a warning message in yellow."""
    CONSOLE.print(f"[yellow]⚠ {escape(message)}[/yellow]")


def ui_error(message: str) -> None:
    """Display an error message in bold red."""
    CONSOLE.print(f"[bold red]✗ {escape(message)}[/bold red]")


def ui_summary(rows: list[tuple[str, str]]) -> None:
    r"""Render a two-column summary table.

    Parameters
    ----------
    rows : list[tuple[str, str]]
        ``(item, outcome)`` pairs. An empty list renders an empty table.

    Examples
    --------
    >>> ui_summary([("docker_run.ps1", "written")])  # doctest: +SKIP
    """
    table = Table(show_header=True, header_style="bold blue")
    table.add_column("Item", style="bold")
    table.add_column("Outcome")
    for item, outcome in rows:
        table.add_row(item, outcome)
    CONSOLE.print(table)


__all__ = [
    "CONSOLE",
    "ui_error",
    "ui_info",
    "ui_rule",
    "ui_success",
    "ui_summary",
    "ui_warning",
]
