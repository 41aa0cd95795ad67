"""
Summary: Per-entry bookkeeping of the field changes chosen for commit.
Why: Let users override policy decisions field by field before applying.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .models import PreviewEntry, ProposedChange


class SelectionLedger:
    """Map entry ids to the ordered list of field names selected for commit.

    The ledger is a plain set-membership structure. Policy status only
    influences ``initialize`` and ``select_all_for_entry``; ``toggle_field``
    accepts any field so users can opt a rejected change back in.
    """

    _selections: dict[str, list[str]]

    def __init__(self) -> None:
        self._selections = {}

    def initialize(self, preview_entries: Iterable[PreviewEntry]) -> None:
        """Replace all state with the approvable fields of ``preview_entries``."""

        self._selections = {
            entry.entry_id: _unique(entry.approvable_fields) for entry in preview_entries
        }

    def toggle_field(self, entry_id: str, field_name: str, selected: bool) -> None:
        current = self._selections.get(entry_id, [])
        if selected:
            if field_name not in current:
                current = [*current, field_name]
        else:
            current = [name for name in current if name != field_name]
        self._selections[entry_id] = current

    def select_all_for_entry(
        self,
        entry_id: str,
        changes: Sequence[ProposedChange],
        selected: bool,
    ) -> None:
        """Select every approvable change of an entry, or clear the entry."""

        if selected:
            self._selections[entry_id] = _unique(
                change.field_name for change in changes if change.is_approvable
            )
        else:
            self._selections[entry_id] = []

    def select_all(self, preview_entries: Iterable[PreviewEntry], selected: bool) -> None:
        for entry in preview_entries:
            self.select_all_for_entry(entry.entry_id, entry.changes, selected)

    def reconcile(self, preview_entries: Iterable[PreviewEntry]) -> None:
        """Drop selections that no longer match a change in ``preview_entries``."""

        known: dict[str, set[str]] = {
            entry.entry_id: {change.field_name for change in entry.changes}
            for entry in preview_entries
        }
        reconciled: dict[str, list[str]] = {}
        for entry_id, fields in self._selections.items():
            available = known.get(entry_id)
            if available is None:
                continue
            reconciled[entry_id] = [name for name in fields if name in available]
        self._selections = reconciled

    def selected_fields(self, entry_id: str) -> list[str]:
        return list(self._selections.get(entry_id, []))

    def is_selected(self, entry_id: str, field_name: str) -> bool:
        return field_name in self._selections.get(entry_id, [])

    def count_selected(self, entry_id: str) -> int:
        return len(self._selections.get(entry_id, []))

    @staticmethod
    def count_approvable(entry_id: str, changes: Sequence[ProposedChange]) -> int:
        # Counted from the changes alone; entry_id is kept for call-site symmetry.
        _ = entry_id
        return sum(1 for change in changes if change.is_approvable)

    def is_all_selected(self, entry_id: str, changes: Sequence[ProposedChange]) -> bool:
        """Return True when every approvable change of the entry is selected."""

        approvable = self.count_approvable(entry_id, changes)
        return approvable > 0 and self.count_selected(entry_id) == approvable

    def has_selections(self) -> bool:
        return any(self._selections.values())

    def snapshot(self) -> dict[str, list[str]]:
        return {entry_id: list(fields) for entry_id, fields in self._selections.items()}

    def reset(self) -> None:
        self._selections = {}

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._selections

    def __len__(self) -> int:
        return len(self._selections)


def _unique(names: Iterable[str]) -> list[str]:
    seen: list[str] = []
    for name in names:
        if name not in seen:
            seen.append(name)
    return seen


__all__ = ["SelectionLedger"]
