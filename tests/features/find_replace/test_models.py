"""Tests for the find & replace value objects."""

from __future__ import annotations

import pytest

from magicreplace.features.find_replace import (
    ApplyRecord,
    ApplyStatus,
    Category,
    CommitItem,
    Entry,
    PreviewEntry,
    ProposedChange,
    ScanMatch,
    WorkflowStage,
)


def change(field_name: str, *, approved: bool | None = None) -> ProposedChange:
    return ProposedChange(
        field_name=field_name,
        before_text="before",
        after_text="after",
        policy_approved=approved,
    )


def preview_entry(entry_id: str, *changes: ProposedChange) -> PreviewEntry:
    return PreviewEntry(entry_id=entry_id, entry_label=entry_id.upper(), changes=changes)


@pytest.mark.parametrize(
    "approved, expected",
    [(None, True), (True, True), (False, False)],
    ids=["absent", "approved", "rejected"],
)
def test_policy_flag_is_tri_state(approved: bool | None, expected: bool) -> None:
    """Only an explicit False marks a change as not approvable."""

    proposed = change("title", approved=approved)

    assert proposed.is_approvable is expected
    assert proposed.policy_approved is approved


@pytest.mark.parametrize(
    "factory",
    [
        lambda: ScanMatch(entry_id="", field_name="title", before_text="x", entry_label="E"),
        lambda: ScanMatch(entry_id="E1", field_name="", before_text="x", entry_label="E"),
        lambda: ProposedChange(field_name="", before_text="a", after_text="b"),
        lambda: PreviewEntry(entry_id="", entry_label="E"),
        lambda: CommitItem(entry_id="E1", field_name="", new_value="b"),
        lambda: Category(id="", label="Empty"),
        lambda: Entry(id="", label="Empty"),
    ],
)
def test_empty_identifiers_are_rejected(factory: object) -> None:
    with pytest.raises(ValueError):
        _ = factory()  # pyright: ignore[reportCallIssue]


def test_preview_entry_lookup_and_approvable_fields() -> None:
    entry = preview_entry(
        "E1",
        change("title", approved=True),
        change("body", approved=False),
        change("summary"),
    )

    assert entry.find_change("body") is entry.changes[1]
    assert entry.find_change("missing") is None
    assert entry.approvable_fields == ["title", "summary"]


def test_apply_status_from_payload() -> None:
    assert ApplyStatus.from_payload("updated") is ApplyStatus.UPDATED
    assert ApplyStatus.from_payload("failed") is ApplyStatus.FAILED
    with pytest.raises(ValueError, match="Unsupported apply status"):
        _ = ApplyStatus.from_payload("partial")


def test_apply_record_success_flag() -> None:
    ok = ApplyRecord(entry_id="E1", entry_label="E1", status=ApplyStatus.UPDATED)
    failed = ApplyRecord(entry_id="E2", entry_label="E2", status=ApplyStatus.FAILED, error="locked")

    assert ok.succeeded
    assert not failed.succeeded
    assert failed.error == "locked"


def test_workflow_stages_are_ordered() -> None:
    assert [stage.value for stage in WorkflowStage] == ["select", "scan", "preview", "apply"]
    assert [stage.position for stage in WorkflowStage] == [0, 1, 2, 3]
    assert WorkflowStage.PREVIEW.display_title == "Preview & Approve"
