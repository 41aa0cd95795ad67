"""src/magicreplace/ui/cli/display/scan.py
What: Render scan matches grouped per entry.
Why: Let users check where a pattern occurs before previewing replacements.
"""

from __future__ import annotations

from typing import final

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from magicreplace.features.find_replace import ScanReport, group_scan_matches


@final
class ScanDisplay:
    """Handles scan result display in CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_scan(self, report: ScanReport) -> None:
        groups = group_scan_matches(report.matches)
        self.console.print(
            f"[bold cyan]Scan results:[/bold cyan] {report.total_matches} matches "
            f"in {len(groups)} entries"
        )
        if not groups:
            self.console.print("[yellow]No matches found.[/yellow]")
            return

        tree = Tree("🔍 Matches")
        for group in groups:
            node = tree.add(
                f"📄 [bold]{escape(group.entry_label)}[/bold] "
                f"[dim]({escape(group.entry_id)})[/dim] · {len(group.matches)} match(es)"
            )
            for match in group.matches:
                _ = node.add(
                    f"[magenta]{escape(match.field_name)}[/magenta]: {escape(match.before_text)}"
                )
        self.console.print(tree)
