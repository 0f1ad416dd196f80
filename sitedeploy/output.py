"""Rich-based console output for sitedeploy commands."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table


class OutputFormatter:
    """Writes user-facing status messages to the terminal."""

    def __init__(self, quiet: bool = False, console: Optional[Console] = None):
        """Initialize output formatter.

        Args:
            quiet: Suppress informational output (errors are still shown)
            console: Rich console to write to (defaults to stdout)
        """
        self.quiet = quiet
        self.console = console or Console(highlight=False)

    def print(self, message: str = "") -> None:
        """Print a plain line."""
        if not self.quiet:
            self.console.print(message)

    def info(self, message: str) -> None:
        """Print an informational message."""
        if not self.quiet:
            self.console.print(message)

    def success(self, message: str) -> None:
        """Print a success message in green."""
        if not self.quiet:
            self.console.print(f"[green]{message}[/green]")

    def warning(self, message: str) -> None:
        """Print a warning message in yellow."""
        if not self.quiet:
            self.console.print(f"[yellow]{message}[/yellow]")

    def error(self, message: str) -> None:
        """Print an error message in red. Shown even in quiet mode."""
        self.console.print(f"[bold red]Error:[/bold red] {escape(message)}")

    def print_summary(self, title: str, items: list[tuple[str, str]]) -> None:
        """Print a two-column summary table.

        Args:
            title: Table title
            items: (label, value) rows
        """
        if self.quiet:
            return

        table = Table(title=title, show_header=False, title_justify="left")
        table.add_column("Field", style="bold")
        table.add_column("Value")
        for label, value in items:
            table.add_row(label, value)
        self.console.print(table)
