"""src/magicreplace/ui/cli/commands/scan.py
What: Run the scan stage and render its matches.
Why: Give a read-only look at a pattern's reach before replacing it.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import final

from rich.console import Console

from magicreplace.application.services.find_replace_service import (
    FindReplaceService,
    ReplaceRequest,
)
from magicreplace.ui.cli.args.options import ScanArgs
from magicreplace.ui.cli.display.scan import ScanDisplay
from magicreplace.ui.cli.display.stepper import render_stepper

from .executor import CommandExecutor


@final
class ScanCommand(CommandExecutor):
    """Scan selected entries for a pattern."""

    args: ScanArgs

    def __init__(
        self,
        args: ScanArgs,
        *,
        service_factory: Callable[[], FindReplaceService] | None = None,
        console: Console | None = None,
    ) -> None:
        super().__init__(service_factory=service_factory, console=console)
        self.args = args
        self.scan_display = ScanDisplay(self.console)

    def execute(self) -> bool:
        request = ReplaceRequest(
            category_id=self.args.category,
            pattern=self.args.pattern,
            entry_ids=self.args.entry_ids,
        )
        session = asyncio.run(self.app.scan(request))
        if session is None or session.scan_report is None:
            return False

        if not self.args.quiet:
            render_stepper(self.console, session.stage)
            self.scan_display.show_scan(session.scan_report)
        return True
