"""src/magicreplace/ui/cli/display/result.py
What: Render the outcome of an apply call.
Why: Keep console output formatting consistent across the interface.
"""

from __future__ import annotations

from typing import final

from rich.console import Console
from rich.markup import escape

from magicreplace.features.find_replace import ApplySummary, summarize_apply


@final
class ResultDisplay:
    """Handles apply result display in CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        """Initialize result display."""
        self.console = console or Console()

    def show_results(self, summary: ApplySummary, quiet: bool = False) -> None:
        """Display apply results.

        Args:
            summary: Response of the apply call.
            quiet: Whether to suppress non-error output.
        """
        overview = summarize_apply(summary)

        if not quiet:
            self.console.print("\n[bold]Apply Summary:[/bold]")
            self.console.print(f"Entries updated (reported): {overview.total_updated}")
            self.console.print(f"[green]Updated: {overview.updated_count}[/green]")
            for record in overview.updated:
                fields = ", ".join(change.field_name for change in record.changes or ())
                suffix = f" [dim]({escape(fields)})[/dim]" if fields else ""
                self.console.print(f"[green]  • {escape(record.entry_label)}{suffix}[/green]")

        if not overview.failed:
            return

        self.console.print(f"[red]Failed: {overview.failed_count}[/red]")
        for record in overview.failed:
            reason = record.error or "unknown error"
            self.console.print(
                f"[red]  • {escape(record.entry_label)}: {escape(reason)}[/red]"
            )
