"""src/magicreplace/ui/cli/commands/replace.py
What: Run preview, approval and apply for a find & replace request.
Why: Drive the full guided workflow from the terminal.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import final

from rich.console import Console
from rich.prompt import Confirm

from magicreplace.application.services.find_replace_service import (
    FindReplaceService,
    ReplaceRequest,
)
from magicreplace.features.find_replace import summarize_apply
from magicreplace.platform.logging import logger
from magicreplace.ui.cli.args.options import ReplaceArgs
from magicreplace.ui.cli.display.preview import PreviewDisplay
from magicreplace.ui.cli.display.result import ResultDisplay
from magicreplace.ui.cli.display.stepper import render_stepper

from .executor import CommandExecutor


@final
class ReplaceCommand(CommandExecutor):
    """Preview replacements, confirm, and apply the selected subset."""

    args: ReplaceArgs

    def __init__(
        self,
        args: ReplaceArgs,
        *,
        service_factory: Callable[[], FindReplaceService] | None = None,
        console: Console | None = None,
        confirm: Callable[[str], bool] | None = None,
    ) -> None:
        super().__init__(service_factory=service_factory, console=console)
        self.args = args
        self._confirm = confirm or self._ask
        self.preview_display = PreviewDisplay(self.console)
        self.result_display = ResultDisplay(self.console)

    def execute(self) -> bool:
        request = ReplaceRequest(
            category_id=self.args.category,
            pattern=self.args.pattern,
            replacement=self.args.replacement,
            entry_ids=self.args.entry_ids,
            smart_mode=self.args.smart,
            include=self.args.include,
            exclude=self.args.exclude,
            only_included=self.args.only_included,
        )
        session = asyncio.run(self.app.preview(request))
        if session is None:
            return False

        if not self.args.quiet:
            render_stepper(self.console, session.stage)
            self.preview_display.show_preview(session.preview_entries, session.ledger)

        if self.args.dry_run:
            logger.info("Dry run: no changes were applied")
            return True

        payload = session.commit_payload()
        if payload and not self.args.assume_yes:
            entry_count = len({item.entry_id for item in payload})
            if not self._confirm(f"Apply {len(payload)} change(s) to {entry_count} entries?"):
                logger.info("Apply cancelled; nothing was changed")
                return True

        if not asyncio.run(self.app.apply(session)):
            # Nothing selected is a no-op, not a failure.
            return not payload

        summary = session.apply_summary
        assert summary is not None
        if not self.args.quiet:
            render_stepper(self.console, session.stage)
        self.result_display.show_results(summary, quiet=self.args.quiet)
        return summarize_apply(summary).failed_count == 0

    def _ask(self, question: str) -> bool:
        return Confirm.ask(question, console=self.console, default=False)
