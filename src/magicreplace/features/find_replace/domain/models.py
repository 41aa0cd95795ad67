"""Value objects exchanged between the find & replace stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


def _require(value: str, label: str) -> None:
    if not isinstance(value, str) or not value:
        msg = f"{label} must be a non-empty string"
        raise ValueError(msg)


class WorkflowStage(str, Enum):
    """Ordered stages of a find & replace run."""

    SELECT = "select"
    SCAN = "scan"
    PREVIEW = "preview"
    APPLY = "apply"

    @property
    def display_title(self) -> str:
        return _STAGE_TITLES[self]

    @property
    def position(self) -> int:
        return list(WorkflowStage).index(self)


_STAGE_TITLES: dict[WorkflowStage, str] = {
    WorkflowStage.SELECT: "Select Content",
    WorkflowStage.SCAN: "Scan Content",
    WorkflowStage.PREVIEW: "Preview & Approve",
    WorkflowStage.APPLY: "Apply Changes",
}


class ApplyStatus(str, Enum):
    """Outcome of applying the selected changes to one entry."""

    UPDATED = "updated"
    FAILED = "failed"

    @staticmethod
    def from_payload(value: str) -> "ApplyStatus":
        """Translate a raw status string into the matching member."""

        for status in ApplyStatus:
            if status.value == value:
                return status
        valid = ", ".join(s.value for s in ApplyStatus)
        msg = f"Unsupported apply status '{value}'. Valid options: {valid}"
        raise ValueError(msg)


@dataclass(slots=True, frozen=True)
class Category:
    """A schema grouping entries in the content store."""

    id: str
    label: str

    def __post_init__(self) -> None:
        _require(self.id, "category id")


@dataclass(slots=True, frozen=True)
class Entry:
    """One content record that can be targeted by a run."""

    id: str
    label: str

    def __post_init__(self) -> None:
        _require(self.id, "entry id")


@dataclass(slots=True, frozen=True)
class ScanMatch:
    """One occurrence of the search pattern in a field of an entry."""

    entry_id: str
    field_name: str
    before_text: str
    entry_label: str

    def __post_init__(self) -> None:
        _require(self.entry_id, "entry id")
        _require(self.field_name, "field name")


@dataclass(slots=True, frozen=True)
class ScanReport:
    """Response of a scan call.

    ``total_matches`` is reported by the content store and is kept as-is even
    when it differs from ``len(matches)``.
    """

    total_matches: int
    matches: tuple[ScanMatch, ...] = ()


@dataclass(slots=True, frozen=True)
class ProposedChange:
    """A computed before/after pair for one field.

    ``policy_approved`` is tri-state: ``None`` (absent) and ``True`` both mean
    the change is approved, only ``False`` marks it as rejected.
    """

    field_name: str
    before_text: str
    after_text: str
    policy_approved: bool | None = None

    def __post_init__(self) -> None:
        _require(self.field_name, "field name")

    @property
    def is_approvable(self) -> bool:
        return self.policy_approved is not False


@dataclass(slots=True, frozen=True)
class PreviewEntry:
    """All proposed changes for one entry with at least one match."""

    entry_id: str
    entry_label: str
    changes: tuple[ProposedChange, ...] = ()

    def __post_init__(self) -> None:
        _require(self.entry_id, "entry id")

    def find_change(self, field_name: str) -> ProposedChange | None:
        for change in self.changes:
            if change.field_name == field_name:
                return change
        return None

    @property
    def approvable_fields(self) -> list[str]:
        return [change.field_name for change in self.changes if change.is_approvable]


@dataclass(slots=True, frozen=True)
class CommitItem:
    """One field update submitted to the apply call."""

    entry_id: str
    field_name: str
    new_value: str

    def __post_init__(self) -> None:
        _require(self.entry_id, "entry id")
        _require(self.field_name, "field name")


@dataclass(slots=True, frozen=True)
class ApplyRecord:
    """Per-entry outcome reported by the apply call."""

    entry_id: str
    entry_label: str
    status: ApplyStatus
    changes: tuple[ProposedChange, ...] | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is ApplyStatus.UPDATED


@dataclass(slots=True, frozen=True)
class ApplySummary:
    """Full response of one apply call."""

    total_updated: int
    records: tuple[ApplyRecord, ...] = field(default_factory=tuple)


__all__ = [
    "ApplyRecord",
    "ApplyStatus",
    "ApplySummary",
    "Category",
    "CommitItem",
    "Entry",
    "PreviewEntry",
    "ProposedChange",
    "ScanMatch",
    "ScanReport",
    "WorkflowStage",
]
