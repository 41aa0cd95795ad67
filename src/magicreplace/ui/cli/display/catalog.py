"""src/magicreplace/ui/cli/display/catalog.py
What: Render category and entry listings as Rich tables.
Why: Help users pick the ids the scan and replace commands expect.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import final

from rich import box
from rich.console import Console
from rich.table import Table

from magicreplace.features.find_replace import Category, Entry


@final
class CatalogDisplay:
    """Handles category and entry listings in CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_categories(self, categories: Sequence[Category]) -> None:
        if not categories:
            self.console.print("[yellow]No categories available.[/yellow]")
            return
        self.console.print(self._build_table("Categories", [(c.id, c.label) for c in categories]))

    def show_entries(self, category_id: str, entries: Sequence[Entry]) -> None:
        if not entries:
            self.console.print(f"[yellow]No entries found in {category_id}.[/yellow]")
            return
        self.console.print(
            self._build_table(f"Entries in {category_id}", [(e.id, e.label) for e in entries])
        )

    @staticmethod
    def _build_table(title: str, rows: Sequence[tuple[str, str]]) -> Table:
        table = Table(
            title=title,
            show_header=True,
            header_style="bold magenta",
            box=box.SIMPLE_HEAD,
        )
        table.add_column("Id", style="bold")
        table.add_column("Title")
        for identifier, label in rows:
            table.add_row(identifier, label)
        return table
