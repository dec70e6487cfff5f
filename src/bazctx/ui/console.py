"""Rich-powered status output for bazctx.

The context bundle itself goes to stdout as plain text; everything printed
here goes to stderr so it never mixes into the bundle.
"""

from __future__ import annotations

import logging

from rich.console import Console as RichConsole
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from bazctx.context.models import ContextBundle


class Console:
    """Terminal status output for bazctx using Rich."""

    def __init__(self, stderr: bool = True) -> None:
        self.console = RichConsole(stderr=stderr)

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {escape(message)}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]![/yellow] {escape(message)}")

    def info(self, message: str) -> None:
        self.console.print(f"[blue]i[/blue] {escape(message)}")

    def detail(self, text: str) -> None:
        """Print indented, dimmed text such as captured bazel stderr."""
        for line in text.strip().splitlines():
            self.console.print(f"  [dim]{escape(line)}[/dim]")

    def show_bundle(self, bundle: ContextBundle) -> None:
        """Display the run summary in a table."""
        table = Table(title="Context Bundle", border_style="cyan")
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right", style="cyan")

        limit = "unlimited" if bundle.limit is None else f"{bundle.limit:,}"
        table.add_row("Target", escape(bundle.target))
        table.add_row("Package", escape(f"//{bundle.package}"))
        table.add_row("Candidates", str(bundle.candidates_available))
        table.add_row("Files included", str(bundle.files_included))
        table.add_row("Unreadable", str(bundle.files_missing))
        table.add_row("Lines", f"{bundle.lines_included:,} / {limit}")
        table.add_row("Truncated", "yes" if bundle.truncated else "no")
        table.add_row("Time", f"{bundle.elapsed_ms:.1f}ms")

        self.console.print(table)

    def setup_logging(self, verbose: bool = False) -> None:
        """Route bazctx log records to this console."""
        handler = RichHandler(console=self.console, show_path=False)
        logger = logging.getLogger("bazctx")
        logger.handlers = [handler]
        logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
