"""
Summary: Derive commit payloads and feedback counts from ledger and preview data.
Why: Keep every count a pure function of current state so nothing drifts.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .models import ApplyRecord, ApplyStatus, ApplySummary, CommitItem, PreviewEntry, ScanMatch
from .selection import SelectionLedger


@dataclass(slots=True, frozen=True)
class ScanGroup:
    """Scan matches of a single entry, in the order they were reported."""

    entry_id: str
    entry_label: str
    matches: tuple[ScanMatch, ...]


@dataclass(slots=True, frozen=True)
class PreviewOverview:
    """Approved versus policy-rejected change counts of a preview."""

    approved: int
    rejected: int

    @property
    def total(self) -> int:
        return self.approved + self.rejected


@dataclass(slots=True, frozen=True)
class ApplyOverview:
    """Apply records partitioned by status.

    ``total_updated`` is the content store's own figure and is never
    recomputed from ``updated``.
    """

    total_updated: int
    updated: tuple[ApplyRecord, ...]
    failed: tuple[ApplyRecord, ...]

    @property
    def updated_count(self) -> int:
        return len(self.updated)

    @property
    def failed_count(self) -> int:
        return len(self.failed)


def build_commit_payload(
    preview_entries: Sequence[PreviewEntry],
    ledger: SelectionLedger,
) -> list[CommitItem]:
    """Emit one commit item per selected change.

    Preview order is kept, then change order within each entry. An empty
    result means there is nothing to submit.
    """

    payload: list[CommitItem] = []
    for entry in preview_entries:
        selected = ledger.selected_fields(entry.entry_id)
        if not selected:
            continue
        for change in entry.changes:
            if change.field_name in selected:
                payload.append(
                    CommitItem(
                        entry_id=entry.entry_id,
                        field_name=change.field_name,
                        new_value=change.after_text,
                    )
                )
    return payload


def summarize_apply(summary: ApplySummary) -> ApplyOverview:
    updated: list[ApplyRecord] = []
    failed: list[ApplyRecord] = []
    for record in summary.records:
        if record.status is ApplyStatus.UPDATED:
            updated.append(record)
        else:
            failed.append(record)
    return ApplyOverview(
        total_updated=summary.total_updated,
        updated=tuple(updated),
        failed=tuple(failed),
    )


def summarize_preview(preview_entries: Iterable[PreviewEntry]) -> PreviewOverview:
    approved = 0
    rejected = 0
    for entry in preview_entries:
        for change in entry.changes:
            if change.is_approvable:
                approved += 1
            else:
                rejected += 1
    return PreviewOverview(approved=approved, rejected=rejected)


def group_scan_matches(matches: Iterable[ScanMatch]) -> list[ScanGroup]:
    """Group matches by entry, ordering groups by first appearance."""

    order: list[str] = []
    labels: dict[str, str] = {}
    grouped: dict[str, list[ScanMatch]] = {}
    for match in matches:
        if match.entry_id not in grouped:
            order.append(match.entry_id)
            labels[match.entry_id] = match.entry_label
            grouped[match.entry_id] = []
        grouped[match.entry_id].append(match)
    return [
        ScanGroup(entry_id=entry_id, entry_label=labels[entry_id], matches=tuple(grouped[entry_id]))
        for entry_id in order
    ]


__all__ = [
    "ApplyOverview",
    "PreviewOverview",
    "ScanGroup",
    "build_commit_payload",
    "group_scan_matches",
    "summarize_apply",
    "summarize_preview",
]
