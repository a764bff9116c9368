"""Terminal reporting for importmap runs.

This module provides the ReportTUI class, a Rich-based presenter for the
scan results and the outcome of an update.

Example:
    from importmap.ui import ReportTUI

    tui = ReportTUI()
    tui.display_import_map(import_map)
    tui.display_summary(summary)
"""

from typing import List, Optional, Tuple

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from importmap.models import AssetKind, ImportMap, SkipReason, UpdateSummary


class ReportTUI:
    """Rich-based output for scan results and update summaries.

    Args:
        console: Optional Rich Console instance for output. If None, creates
            a new Console. Pass a custom Console for testing (e.g., with
            StringIO file for output capture).

    Attributes:
        console: The Rich Console instance used for all output.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def display_import_map(self, import_map: ImportMap) -> None:
        """Display every entry with its asset kind."""
        if not import_map:
            self.console.print("[yellow]Import map is empty.[/yellow]")
            return

        table = Table(title="Import Map")
        table.add_column("Kind", style="magenta", no_wrap=True)
        table.add_column("Original URL", style="cyan")
        table.add_column("Fingerprinted URL", style="green")

        for original_url, hashed_url in import_map.items():
            kind = AssetKind.from_path(hashed_url)
            table.add_row(kind.value if kind else "-", original_url, hashed_url)

        self.console.print(table)

    def display_skipped(self, skipped: List[Tuple[str, SkipReason]]) -> None:
        """List files excluded by the scan policy."""
        excluded = [
            (path, reason)
            for path, reason in skipped
            if reason is not SkipReason.UNSUPPORTED_EXTENSION
        ]
        if not excluded:
            return

        self.console.print("[yellow]Excluded files:[/yellow]")
        for path, reason in excluded:
            self.console.print(f"  [dim]- {path} ({reason.value})[/dim]")

    def display_summary(self, summary: UpdateSummary) -> None:
        """Display the outcome of an update run in a panel."""
        mode = "DRY RUN" if summary.dry_run else "UPDATE"
        body = (
            f"Document: {summary.html_path}\n"
            f"Entries: {summary.entries} "
            f"({summary.scripts} modules, {summary.stylesheets} stylesheets)\n"
            f"Duration: {summary.duration:.2f}s"
        )
        if summary.dev_mode:
            body += "\nDevelopment mode: region cleared"
        self.console.print(Panel(body, title=f"importmap - {mode}", border_style="blue"))

        if not summary.changed:
            self.console.print(f"[dim]Up to date: {summary.html_path}[/dim]")
        elif summary.dry_run:
            self.console.print(f"[yellow]Would update: {summary.html_path}[/yellow]")
        else:
            self.console.print(f"[green]Updated: {summary.html_path}[/green]")
