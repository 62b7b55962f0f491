from __future__ import annotations

"""Centralized console output for CLI commands."""

from enum import Enum
from typing import Any

from rich.console import Console
from rich.table import Table


class OutputLevel(Enum):
    """Output verbosity level."""

    QUIET = 0  # Only errors
    NORMAL = 1  # Standard
    VERBOSE = 2  # All details


class Outputter:
    """Centralized output handler for CLI commands.

    Handles output formatting for quiet/normal/verbose modes.
    """

    def __init__(self, level: OutputLevel = OutputLevel.NORMAL, console: Console | None = None):
        """Initialize outputter.

        Args:
            level: Output verbosity level
            console: Console for regular output (defaults to stdout)
        """
        self.level = level
        self.console = console or Console(soft_wrap=True)
        self.err_console = Console(stderr=True, soft_wrap=True)

    def header(self, title: str, **kwargs: Any) -> None:
        """Show a header line followed by key-value details.

        Args:
            title: Header text
            **kwargs: Additional key-value pairs to display
        """
        if self.level == OutputLevel.QUIET:
            return

        self.console.print(title, style="bold")
        for key, value in kwargs.items():
            # Convert key from snake_case to Title Case
            display_key = key.replace("_", " ").title()
            self.console.print(f"{display_key}: {value}", highlight=False, markup=False)

    def info(self, message: str) -> None:
        """Show info message.

        Args:
            message: Info message
        """
        if self.level == OutputLevel.QUIET:
            return

        self.console.print(message, highlight=False, markup=False)

    def verbose(self, message: str) -> None:
        """Show verbose message.

        Args:
            message: Verbose message
        """
        if self.level != OutputLevel.VERBOSE:
            return

        self.console.print(message, highlight=False, markup=False)

    def success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Success message
        """
        if self.level == OutputLevel.QUIET:
            return

        self.console.print(f"✓ {message}", style="green", highlight=False, markup=False)

    def warning(self, message: str) -> None:
        """Show warning message on stderr.

        Args:
            message: Warning message
        """
        if self.level == OutputLevel.QUIET:
            return

        self.err_console.print(f"⚠️  {message}", style="yellow", highlight=False, markup=False)

    def error(self, message: str) -> None:
        """Show error message (always shown, even in quiet mode).

        Args:
            message: Error message
        """
        self.err_console.print(f"✗ {message}", style="red", highlight=False, markup=False)

    def table(self, title: str, columns: list[str], rows: list[list[str]]) -> None:
        """Show rows as a table.

        Args:
            title: Table title
            columns: Column headers
            rows: Table rows, one string per column
        """
        if self.level == OutputLevel.QUIET:
            return

        table = Table(title=title, title_justify="left")
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*row)
        self.console.print(table)

    def summary(self, **stats: Any) -> None:
        """Show summary statistics.

        Args:
            **stats: Statistics as key-value pairs
        """
        if self.level == OutputLevel.QUIET:
            return

        self.console.print("\n=== Summary ===", style="bold")
        for key, value in stats.items():
            # Convert key from snake_case to Title Case
            display_key = key.replace("_", " ").title()
            self.console.print(f"  {display_key}: {value}", highlight=False, markup=False)
