"""src/magicreplace/ui/cli/commands/listing.py
What: Commands listing categories and entries.
Why: Surface the ids needed by the scan and replace commands.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import final

from rich.console import Console

from magicreplace.application.services.find_replace_service import FindReplaceService
from magicreplace.ui.cli.args.options import CategoriesArgs, EntriesArgs
from magicreplace.ui.cli.display.catalog import CatalogDisplay

from .executor import CommandExecutor


@final
class CategoriesCommand(CommandExecutor):
    """List the categories of the content store."""

    args: CategoriesArgs

    def __init__(
        self,
        args: CategoriesArgs,
        *,
        service_factory: Callable[[], FindReplaceService] | None = None,
        console: Console | None = None,
    ) -> None:
        super().__init__(service_factory=service_factory, console=console)
        self.args = args
        self.catalog_display = CatalogDisplay(self.console)

    def execute(self) -> bool:
        session = self.app.new_session()
        if not asyncio.run(session.load_categories()):
            return False
        self.catalog_display.show_categories(session.categories)
        return True


@final
class EntriesCommand(CommandExecutor):
    """List the entries of one category."""

    args: EntriesArgs

    def __init__(
        self,
        args: EntriesArgs,
        *,
        service_factory: Callable[[], FindReplaceService] | None = None,
        console: Console | None = None,
    ) -> None:
        super().__init__(service_factory=service_factory, console=console)
        self.args = args
        self.catalog_display = CatalogDisplay(self.console)

    def execute(self) -> bool:
        session = self.app.new_session()
        if not asyncio.run(session.choose_category(self.args.category)):
            return False
        self.catalog_display.show_entries(self.args.category, session.entries)
        return True
