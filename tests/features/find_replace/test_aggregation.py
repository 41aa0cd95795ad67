"""
Summary: Tests for commit payload assembly and feedback counts.
Why: Counts shown to users must be pure functions of preview and ledger state.
"""

from __future__ import annotations

from magicreplace.features.find_replace import (
    ApplyRecord,
    ApplyStatus,
    ApplySummary,
    CommitItem,
    PreviewEntry,
    ProposedChange,
    ScanMatch,
    SelectionLedger,
    build_commit_payload,
    group_scan_matches,
    summarize_apply,
    summarize_preview,
)


def change(field_name: str, after: str, *, approved: bool | None = None) -> ProposedChange:
    return ProposedChange(
        field_name=field_name,
        before_text="Acme",
        after_text=after,
        policy_approved=approved,
    )


def _preview() -> list[PreviewEntry]:
    return [
        PreviewEntry(
            entry_id="E1",
            entry_label="Launch post",
            changes=(
                change("title", "Globex launch", approved=True),
                change("body", "Globex rocks", approved=False),
            ),
        ),
        PreviewEntry(
            entry_id="E2",
            entry_label="About",
            changes=(change("summary", "About Globex"), change("seo", "Globex")),
        ),
    ]


def test_payload_follows_preview_then_change_order() -> None:
    entries = _preview()
    ledger = SelectionLedger()
    ledger.initialize(entries)
    # Toggled in reverse order; the payload still follows preview order.
    ledger.toggle_field("E2", "summary", False)
    ledger.toggle_field("E2", "summary", True)

    payload = build_commit_payload(entries, ledger)

    assert payload == [
        CommitItem(entry_id="E1", field_name="title", new_value="Globex launch"),
        CommitItem(entry_id="E2", field_name="summary", new_value="About Globex"),
        CommitItem(entry_id="E2", field_name="seo", new_value="Globex"),
    ]


def test_payload_includes_user_selected_rejected_change() -> None:
    entries = _preview()[:1]
    ledger = SelectionLedger()
    ledger.initialize(entries)
    ledger.toggle_field("E1", "body", True)

    payload = build_commit_payload(entries, ledger)

    assert [(item.entry_id, item.field_name, item.new_value) for item in payload] == [
        ("E1", "title", "Globex launch"),
        ("E1", "body", "Globex rocks"),
    ]


def test_payload_skips_fields_absent_from_preview() -> None:
    entries = _preview()
    ledger = SelectionLedger()
    ledger.toggle_field("E1", "ghost", True)
    ledger.toggle_field("E9", "title", True)

    assert build_commit_payload(entries, ledger) == []


def test_payload_items_are_unique_pairs() -> None:
    entries = _preview()
    ledger = SelectionLedger()
    ledger.initialize(entries)
    ledger.toggle_field("E1", "title", True)

    payload = build_commit_payload(entries, ledger)
    pairs = [(item.entry_id, item.field_name) for item in payload]

    assert len(pairs) == len(set(pairs))


def test_empty_ledger_produces_empty_payload() -> None:
    assert build_commit_payload(_preview(), SelectionLedger()) == []


def test_summarize_preview_counts_absent_flag_as_approved() -> None:
    overview = summarize_preview(_preview())

    assert overview.approved == 3
    assert overview.rejected == 1
    assert overview.total == 4


def test_summarize_apply_keeps_reported_total() -> None:
    summary = ApplySummary(
        total_updated=3,
        records=(
            ApplyRecord(entry_id="E1", entry_label="Launch post", status=ApplyStatus.UPDATED),
            ApplyRecord(entry_id="E3", entry_label="Pricing", status=ApplyStatus.UPDATED),
            ApplyRecord(
                entry_id="E2",
                entry_label="About",
                status=ApplyStatus.FAILED,
                error="Entry locked",
            ),
        ),
    )

    overview = summarize_apply(summary)

    assert overview.total_updated == 3
    assert overview.updated_count == 2
    assert [record.entry_id for record in overview.updated] == ["E1", "E3"]
    assert overview.failed_count == 1
    assert overview.failed[0].error == "Entry locked"


def test_group_scan_matches_by_first_appearance() -> None:
    matches = [
        ScanMatch(entry_id="E2", field_name="title", before_text="Acme", entry_label="About"),
        ScanMatch(entry_id="E1", field_name="body", before_text="Acme", entry_label="Launch"),
        ScanMatch(entry_id="E2", field_name="seo", before_text="Acme", entry_label="About"),
    ]

    groups = group_scan_matches(matches)

    assert [group.entry_id for group in groups] == ["E2", "E1"]
    assert [match.field_name for match in groups[0].matches] == ["title", "seo"]
    assert groups[1].entry_label == "Launch"


def test_matches_on_one_entry_form_one_group() -> None:
    matches = [
        ScanMatch(entry_id="E1", field_name="title", before_text="foo", entry_label="Launch"),
        ScanMatch(entry_id="E1", field_name="body", before_text="foo bar", entry_label="Launch"),
    ]

    groups = group_scan_matches(matches)

    assert len(groups) == 1
    assert len(groups[0].matches) == 2
