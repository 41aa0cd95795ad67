"""Workflow session driving the select → scan → preview → apply stages."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from logging import Logger, getLogger
from typing import TypeVar

from ..domain.aggregation import build_commit_payload, summarize_apply, summarize_preview
from ..domain.errors import FindReplaceError
from ..domain.models import (
    ApplySummary,
    Category,
    CommitItem,
    Entry,
    PreviewEntry,
    ScanMatch,
    ScanReport,
    WorkflowStage,
)
from ..domain.selection import SelectionLedger
from .ports import ContentStoreGateway, Notice, NoticeLevel, Notifier

T = TypeVar("T")

_SCAN_STAGES: frozenset[WorkflowStage] = frozenset(
    {WorkflowStage.SELECT, WorkflowStage.SCAN, WorkflowStage.PREVIEW}
)
_PREVIEW_STAGES: frozenset[WorkflowStage] = _SCAN_STAGES


class _StaleResponse(Exception):
    """Raised internally when a call resolves after the session was reset."""


class FindReplaceSession:
    """Own the state of one find & replace run.

    Only one boundary call may be outstanding at a time; requests made while
    busy are ignored. Every call remembers the generation it was issued for,
    and ``reset`` starts a new generation so late responses are dropped.
    Transition methods return ``True`` only when the transition took effect.
    """

    _gateway: ContentStoreGateway
    _notifier: Notifier
    _logger: Logger
    _generation: int
    _busy: bool
    _stage: WorkflowStage
    _categories: list[Category]
    _category_id: str | None
    _entries: list[Entry]
    _selected_entry_ids: list[str]
    _search_text: str
    _replace_text: str
    _smart_mode: bool
    _scan_report: ScanReport | None
    _preview_entries: list[PreviewEntry]
    _apply_summary: ApplySummary | None
    _ledger: SelectionLedger

    def __init__(
        self,
        *,
        gateway: ContentStoreGateway,
        notifier: Notifier,
        logger: Logger | None = None,
    ) -> None:
        self._gateway = gateway
        self._notifier = notifier
        self._logger = logger or getLogger(__name__)
        self._generation = 0
        self._busy = False
        self._categories = []
        self._ledger = SelectionLedger()
        self._clear_run_state()

    # ------------------------------------------------------------------ state

    @property
    def stage(self) -> WorkflowStage:
        return self._stage

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def categories(self) -> list[Category]:
        return list(self._categories)

    @property
    def category_id(self) -> str | None:
        return self._category_id

    @property
    def entries(self) -> list[Entry]:
        return list(self._entries)

    @property
    def selected_entry_ids(self) -> list[str]:
        return list(self._selected_entry_ids)

    @property
    def search_text(self) -> str:
        return self._search_text

    @search_text.setter
    def search_text(self, value: str) -> None:
        self._search_text = value

    @property
    def replace_text(self) -> str:
        return self._replace_text

    @replace_text.setter
    def replace_text(self, value: str) -> None:
        self._replace_text = value

    @property
    def smart_mode(self) -> bool:
        return self._smart_mode

    @smart_mode.setter
    def smart_mode(self, value: bool) -> None:
        self._smart_mode = bool(value)

    @property
    def scan_report(self) -> ScanReport | None:
        return self._scan_report

    @property
    def scan_matches(self) -> list[ScanMatch]:
        if self._scan_report is None:
            return []
        return list(self._scan_report.matches)

    @property
    def preview_entries(self) -> list[PreviewEntry]:
        return list(self._preview_entries)

    @property
    def ledger(self) -> SelectionLedger:
        return self._ledger

    @property
    def apply_summary(self) -> ApplySummary | None:
        return self._apply_summary

    # ----------------------------------------------------------------- inputs

    def select_entry(self, entry_id: str, selected: bool) -> bool:
        """Add or remove an entry from the run; unknown ids are ignored."""

        if self._stage is WorkflowStage.APPLY:
            return False
        if entry_id not in {entry.id for entry in self._entries}:
            self._logger.debug("Ignoring selection of unknown entry %s", entry_id)
            return False
        if selected:
            if entry_id not in self._selected_entry_ids:
                self._selected_entry_ids.append(entry_id)
        else:
            self._selected_entry_ids = [
                uid for uid in self._selected_entry_ids if uid != entry_id
            ]
        return True

    def select_all_entries(self, selected: bool) -> bool:
        if self._stage is WorkflowStage.APPLY:
            return False
        self._selected_entry_ids = [entry.id for entry in self._entries] if selected else []
        return True

    @property
    def all_entries_selected(self) -> bool:
        return bool(self._entries) and len(self._selected_entry_ids) == len(self._entries)

    def toggle_change(self, entry_id: str, field_name: str, selected: bool) -> bool:
        """Select or deselect one proposed change regardless of its policy flag."""

        entry = self._find_preview_entry(entry_id)
        if entry is None or entry.find_change(field_name) is None:
            self._logger.warning(
                "Ignoring toggle for %s/%s: not part of the current preview",
                entry_id,
                field_name,
            )
            return False
        self._ledger.toggle_field(entry_id, field_name, selected)
        return True

    def select_all_changes(self, entry_id: str, selected: bool) -> bool:
        entry = self._find_preview_entry(entry_id)
        if entry is None:
            self._logger.warning(
                "Ignoring select-all for %s: not part of the current preview", entry_id
            )
            return False
        self._ledger.select_all_for_entry(entry_id, entry.changes, selected)
        return True

    def select_every_change(self, selected: bool) -> bool:
        """Apply select-all or deselect-all to every entry of the preview."""

        if not self._preview_entries:
            return False
        self._ledger.select_all(self._preview_entries, selected)
        return True

    def commit_payload(self) -> list[CommitItem]:
        return build_commit_payload(self._preview_entries, self._ledger)

    # ----------------------------------------------------------------- guards

    def can_scan(self) -> bool:
        return (
            not self._busy
            and self._stage in _SCAN_STAGES
            and bool(self._category_id)
            and bool(self._search_text.strip())
            and bool(self._selected_entry_ids)
        )

    def can_preview(self) -> bool:
        return (
            not self._busy
            and self._stage in _PREVIEW_STAGES
            and bool(self._category_id)
            and bool(self._search_text.strip())
            and bool(self._replace_text.strip())
            and bool(self._selected_entry_ids)
        )

    def can_apply(self) -> bool:
        return (
            not self._busy
            and self._stage is WorkflowStage.PREVIEW
            and bool(self.commit_payload())
        )

    # ------------------------------------------------------------ transitions

    async def load_categories(self) -> bool:
        if self._busy:
            self._logger.debug("Ignoring category load while another request is running")
            return False
        try:
            # The catalog is not run state, so a reset does not invalidate it.
            categories = await self._call(self._gateway.list_categories, keep_after_reset=True)
        except FindReplaceError as exc:
            self._report_failure(exc, "Failed to load categories")
            return False
        self._categories = categories
        return True

    async def choose_category(self, category_id: str) -> bool:
        """Switch category, clearing entry selection and loading its entries."""

        if self._busy or self._stage is not WorkflowStage.SELECT:
            self._logger.debug("Ignoring category change in stage %s", self._stage.value)
            return False
        if not category_id:
            self._category_id = None
            self._entries = []
            self._selected_entry_ids = []
            return True
        try:
            entries = await self._call(self._gateway.list_entries, category_id)
        except _StaleResponse:
            return False
        except FindReplaceError as exc:
            self._report_failure(exc, "Failed to load entries")
            return False
        self._category_id = category_id
        self._entries = entries
        self._selected_entry_ids = []
        return True

    async def scan(self) -> bool:
        if not self.can_scan():
            self._logger.debug("Scan suppressed: guard not satisfied")
            return False
        assert self._category_id is not None
        entry_ids = list(self._selected_entry_ids)
        try:
            report = await self._call(
                self._gateway.scan, self._category_id, self._search_text, entry_ids
            )
        except _StaleResponse:
            return False
        except FindReplaceError as exc:
            self._report_failure(exc, "Failed to scan content.")
            return False

        self._scan_report = report
        self._preview_entries = []
        self._ledger.reset()
        self._apply_summary = None
        self._advance(WorkflowStage.SCAN)
        self._notify(
            "Scan Complete",
            f"Found {report.total_matches} matches across {len(entry_ids)} selected entries.",
            NoticeLevel.SUCCESS,
        )
        return True

    async def preview(self) -> bool:
        if not self.can_preview():
            self._logger.debug("Preview suppressed: guard not satisfied")
            return False
        assert self._category_id is not None
        try:
            preview_entries = await self._call(
                self._gateway.preview,
                self._category_id,
                self._search_text,
                self._replace_text,
                list(self._selected_entry_ids),
                self._smart_mode,
            )
        except _StaleResponse:
            return False
        except FindReplaceError as exc:
            self._report_failure(exc, "Failed to generate preview.")
            return False

        self._preview_entries = list(preview_entries)
        self._ledger.initialize(self._preview_entries)
        self._scan_report = None
        self._apply_summary = None
        self._advance(WorkflowStage.PREVIEW)
        overview = summarize_preview(self._preview_entries)
        self._notify(
            "Preview Ready",
            f"{overview.approved} changes approved, {overview.rejected} rejected by policy",
            NoticeLevel.SUCCESS,
        )
        return True

    async def apply(self) -> bool:
        if self._busy or self._stage is not WorkflowStage.PREVIEW:
            self._logger.debug("Apply suppressed: guard not satisfied")
            return False
        assert self._category_id is not None

        self._ledger.reconcile(self._preview_entries)
        changes = self.commit_payload()
        if not changes:
            self._notify(
                "No changes selected",
                "Please select at least one change to apply.",
                NoticeLevel.WARNING,
            )
            return False

        try:
            summary = await self._call(self._gateway.apply, self._category_id, changes)
        except _StaleResponse:
            return False
        except FindReplaceError as exc:
            self._report_failure(exc, "Failed to apply changes")
            return False

        self._apply_summary = summary
        self._advance(WorkflowStage.APPLY)
        overview = summarize_apply(summary)
        self._notify(
            "Changes Applied",
            f"{overview.total_updated} entries updated, {overview.failed_count} failed",
            NoticeLevel.WARNING if overview.failed_count else NoticeLevel.SUCCESS,
        )
        return True

    def reset(self) -> None:
        """Return to ``select`` and abandon any outstanding call."""

        previous = self._stage
        self._generation += 1
        self._busy = False
        self._clear_run_state()
        if previous is not WorkflowStage.SELECT:
            self._log_stage_change(previous, WorkflowStage.SELECT)

    # ---------------------------------------------------------------- helpers

    async def _call(
        self,
        func: Callable[..., T],
        *args: object,
        keep_after_reset: bool = False,
    ) -> T:
        """Run a blocking gateway call off the event loop under the busy flag.

        Unless ``keep_after_reset`` is set, an outcome that arrives after a
        ``reset`` raises ``_StaleResponse`` instead of being returned.
        """

        generation = self._generation
        self._busy = True
        try:
            result = await asyncio.to_thread(func, *args)
        except FindReplaceError:
            if generation != self._generation and not keep_after_reset:
                self._discard_stale(func, generation)
                raise _StaleResponse() from None
            raise
        finally:
            if generation == self._generation:
                self._busy = False
        if generation != self._generation and not keep_after_reset:
            self._discard_stale(func, generation)
            raise _StaleResponse()
        return result

    def _clear_run_state(self) -> None:
        self._stage = WorkflowStage.SELECT
        self._category_id = None
        self._entries = []
        self._selected_entry_ids = []
        self._search_text = ""
        self._replace_text = ""
        self._smart_mode = False
        self._scan_report = None
        self._preview_entries = []
        self._apply_summary = None
        self._ledger.reset()

    def _find_preview_entry(self, entry_id: str) -> PreviewEntry | None:
        for entry in self._preview_entries:
            if entry.entry_id == entry_id:
                return entry
        return None

    def _advance(self, stage: WorkflowStage) -> None:
        previous = self._stage
        self._stage = stage
        if previous is not stage:
            self._log_stage_change(previous, stage)

    def _log_stage_change(self, previous: WorkflowStage, current: WorkflowStage) -> None:
        self._logger.debug(
            "Stage %s -> %s",
            previous.value,
            current.value,
            extra={
                "workflow_event": "workflow.stage.changed",
                "previous_stage": previous.display_title,
                "current_stage": current.display_title,
            },
        )

    def _discard_stale(self, func: Callable[..., object], generation: int) -> None:
        self._logger.debug(
            "Discarding %s response issued for generation %d (current %d)",
            getattr(func, "__name__", "boundary"),
            generation,
            self._generation,
            extra={"workflow_event": "workflow.response.stale"},
        )

    def _report_failure(self, exc: FindReplaceError, description: str) -> None:
        self._logger.warning("%s: %s", description, str(exc) or exc.__class__.__name__)
        self._notify("Error", description, NoticeLevel.ERROR)

    def _notify(self, title: str, description: str, level: NoticeLevel) -> None:
        self._notifier.notify(Notice(title=title, description=description, level=level))


__all__ = ["FindReplaceSession"]
