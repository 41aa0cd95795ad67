"""Ports for the find & replace feature."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from ..domain.models import (
    ApplySummary,
    Category,
    CommitItem,
    Entry,
    PreviewEntry,
    ScanReport,
)


class ContentStoreGateway(Protocol):
    """Remote content store operations consumed by the workflow.

    Implementations raise the matching ``FindReplaceError`` subclass when a
    request fails or its response is malformed.
    """

    def list_categories(self) -> list[Category]:
        """Return every category the store exposes."""

        ...

    def list_entries(self, category_id: str) -> list[Entry]:
        """Return the entries belonging to ``category_id``."""

        ...

    def scan(self, category_id: str, pattern: str, entry_ids: Sequence[str]) -> ScanReport:
        """Locate ``pattern`` in the given entries without modifying them."""

        ...

    def preview(
        self,
        category_id: str,
        pattern: str,
        replacement: str,
        entry_ids: Sequence[str],
        smart_mode: bool,
    ) -> list[PreviewEntry]:
        """Compute proposed changes, annotated with the policy decision."""

        ...

    def apply(self, category_id: str, changes: Sequence[CommitItem]) -> ApplySummary:
        """Persist ``changes`` and report the per-entry outcome."""

        ...

    def close(self) -> None:
        """Release any connection held by the gateway."""

        ...


class NoticeLevel(str, Enum):
    """Severity of a user-facing notice."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(slots=True, frozen=True)
class Notice:
    """Short, non-blocking message for the user."""

    title: str
    description: str
    level: NoticeLevel = NoticeLevel.INFO


class Notifier(Protocol):
    """Deliver notices without blocking the workflow."""

    def notify(self, notice: Notice) -> None:
        ...


__all__ = ["ContentStoreGateway", "Notice", "NoticeLevel", "Notifier"]
