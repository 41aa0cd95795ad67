"""src/magicreplace/ui/cli/display/preview.py
Where: CLI adapter layer for preview rendering.
What: Build Rich trees that show proposed changes with policy and selection marks.
Why: Provide users with a visual diff before anything is written back.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import final

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from magicreplace.features.find_replace import (
    PreviewEntry,
    ProposedChange,
    SelectionLedger,
    summarize_preview,
)


@final
class PreviewDisplay:
    """Handles preview display in CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_preview(self, entries: Sequence[PreviewEntry], ledger: SelectionLedger) -> None:
        """Display proposed changes; selected ones are ticked."""

        overview = summarize_preview(entries)
        self.console.print(
            f"[bold cyan]Preview of proposed changes:[/bold cyan] "
            f"[green]{overview.approved} approved[/green], "
            f"[red]{overview.rejected} rejected by policy[/red]"
        )
        if not entries:
            self.console.print("[yellow]No changes proposed.[/yellow]")
            return

        tree = Tree("👁️ Proposed changes")
        for entry in entries:
            selected = ledger.count_selected(entry.entry_id)
            all_marker = "☑" if ledger.is_all_selected(entry.entry_id, entry.changes) else "☐"
            node = tree.add(
                f"{all_marker} 📄 [bold]{escape(entry.entry_label)}[/bold] "
                f"[dim]({escape(entry.entry_id)})[/dim] · {selected}/{len(entry.changes)} selected"
            )
            for change in entry.changes:
                _ = node.add(self._format_change(entry.entry_id, change, ledger))
        self.console.print(tree)

    @staticmethod
    def _format_change(entry_id: str, change: ProposedChange, ledger: SelectionLedger) -> str:
        marker = "☑" if ledger.is_selected(entry_id, change.field_name) else "☐"
        badge = "[green]approved[/green]" if change.is_approvable else "[red]rejected[/red]"
        return (
            f"{marker} [magenta]{escape(change.field_name)}[/magenta] {badge}\n"
            f"  [red]- {escape(change.before_text)}[/red]\n"
            f"  [green]+ {escape(change.after_text)}[/green]"
        )
