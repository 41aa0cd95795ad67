"""Tests for the CLI command executors."""

import io
from collections.abc import Callable
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture
from rich.console import Console

from magicreplace.application.services.find_replace_service import (
    FindReplaceService,
    ReplaceRequest,
)
from magicreplace.features.find_replace import (
    ApplyRecord,
    ApplyStatus,
    ApplySummary,
    Category,
    CommitItem,
    Entry,
    LoadFailure,
    PreviewEntry,
    ProposedChange,
    ScanReport,
)
from magicreplace.ui.cli.args.options import (
    CategoriesArgs,
    EntriesArgs,
    ReplaceArgs,
    ScanArgs,
)
from magicreplace.ui.cli.commands import (
    CategoriesCommand,
    EntriesCommand,
    ReplaceCommand,
    ScanCommand,
)


@pytest.fixture
def gateway(mocker: MockerFixture) -> MagicMock:
    stub = mocker.MagicMock()
    stub.list_categories.return_value = [Category(id="blog_post", label="Blog post")]
    stub.list_entries.return_value = [Entry(id="E1", label="First")]
    stub.scan.return_value = ScanReport(total_matches=0)
    stub.preview.return_value = [
        PreviewEntry(
            entry_id="E1",
            entry_label="First",
            changes=(ProposedChange(field_name="title", before_text="Acme", after_text="Globex"),),
        )
    ]
    stub.apply.return_value = ApplySummary(
        total_updated=1,
        records=(ApplyRecord(entry_id="E1", entry_label="First", status=ApplyStatus.UPDATED),),
    )
    return stub


@pytest.fixture
def service_factory(gateway: MagicMock, mocker: MockerFixture) -> Callable[[], FindReplaceService]:
    return lambda: FindReplaceService(
        gateway_factory=lambda: gateway,
        notifier_factory=lambda: mocker.MagicMock(),
    )


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=120, color_system=None)


def _output(console: Console) -> str:
    stream = console.file
    assert isinstance(stream, io.StringIO)
    return stream.getvalue()


def _replace_args(**overrides: object) -> ReplaceArgs:
    values: dict[str, object] = {
        "command": "replace",
        "category": "blog_post",
        "pattern": "Acme",
        "replacement": "Globex",
        "entry_ids": (),
        "smart": False,
        "include": (),
        "exclude": (),
        "only_included": False,
        "dry_run": False,
        "assume_yes": True,
        "verbose": False,
        "quiet": False,
    }
    values.update(overrides)
    return ReplaceArgs(**values)  # pyright: ignore[reportArgumentType]


def test_categories_command_lists_categories(
    service_factory: Callable[[], FindReplaceService], console: Console
) -> None:
    command = CategoriesCommand(
        CategoriesArgs(command="categories", verbose=False, quiet=False),
        service_factory=service_factory,
        console=console,
    )

    assert command.execute()
    assert "blog_post" in _output(console)


def test_close_releases_the_gateway(
    service_factory: Callable[[], FindReplaceService], gateway: MagicMock, console: Console
) -> None:
    command = CategoriesCommand(
        CategoriesArgs(command="categories", verbose=False, quiet=False),
        service_factory=service_factory,
        console=console,
    )
    assert command.execute()

    command.close()

    gateway.close.assert_called_once_with()


def test_categories_command_fails_on_load_error(
    service_factory: Callable[[], FindReplaceService], gateway: MagicMock, console: Console
) -> None:
    gateway.list_categories.side_effect = LoadFailure("offline")
    command = CategoriesCommand(
        CategoriesArgs(command="categories", verbose=False, quiet=False),
        service_factory=service_factory,
        console=console,
    )

    assert not command.execute()


def test_entries_command_lists_entries(
    service_factory: Callable[[], FindReplaceService], gateway: MagicMock, console: Console
) -> None:
    command = EntriesCommand(
        EntriesArgs(command="entries", category="blog_post", verbose=False, quiet=False),
        service_factory=service_factory,
        console=console,
    )

    assert command.execute()
    gateway.list_entries.assert_called_once_with("blog_post")
    assert "First" in _output(console)


def test_scan_command_builds_request(mocker: MockerFixture, console: Console) -> None:
    service = mocker.MagicMock()
    service.scan = mocker.AsyncMock(return_value=None)
    command = ScanCommand(
        ScanArgs(
            command="scan",
            category="blog_post",
            pattern="Acme",
            entry_ids=("E1",),
            verbose=False,
            quiet=False,
        ),
        service_factory=lambda: service,
        console=console,
    )

    assert not command.execute()
    service.scan.assert_awaited_once_with(
        ReplaceRequest(category_id="blog_post", pattern="Acme", entry_ids=("E1",))
    )


def test_scan_command_renders_report(
    service_factory: Callable[[], FindReplaceService], gateway: MagicMock, console: Console
) -> None:
    command = ScanCommand(
        ScanArgs(
            command="scan",
            category="blog_post",
            pattern="Acme",
            entry_ids=(),
            verbose=False,
            quiet=False,
        ),
        service_factory=service_factory,
        console=console,
    )

    assert command.execute()
    assert "No matches found." in _output(console)


def test_replace_command_applies_selection(
    service_factory: Callable[[], FindReplaceService], gateway: MagicMock, console: Console
) -> None:
    command = ReplaceCommand(
        _replace_args(),
        service_factory=service_factory,
        console=console,
    )

    assert command.execute()
    gateway.apply.assert_called_once_with(
        "blog_post", [CommitItem(entry_id="E1", field_name="title", new_value="Globex")]
    )
    assert "Entries updated (reported): 1" in _output(console)


def test_replace_command_dry_run_skips_apply(
    service_factory: Callable[[], FindReplaceService], gateway: MagicMock, console: Console
) -> None:
    command = ReplaceCommand(
        _replace_args(dry_run=True),
        service_factory=service_factory,
        console=console,
    )

    assert command.execute()
    gateway.apply.assert_not_called()


def test_replace_command_respects_declined_confirmation(
    service_factory: Callable[[], FindReplaceService], gateway: MagicMock, console: Console
) -> None:
    questions: list[str] = []

    def decline(question: str) -> bool:
        questions.append(question)
        return False

    command = ReplaceCommand(
        _replace_args(assume_yes=False),
        service_factory=service_factory,
        console=console,
        confirm=decline,
    )

    assert command.execute()
    assert questions == ["Apply 1 change(s) to 1 entries?"]
    gateway.apply.assert_not_called()


def test_replace_command_empty_selection_is_not_a_failure(
    service_factory: Callable[[], FindReplaceService], gateway: MagicMock, console: Console
) -> None:
    command = ReplaceCommand(
        _replace_args(exclude=(("E1", "title"),)),
        service_factory=service_factory,
        console=console,
    )

    assert command.execute()
    gateway.apply.assert_not_called()


def test_replace_command_fails_when_an_entry_fails(
    service_factory: Callable[[], FindReplaceService], gateway: MagicMock, console: Console
) -> None:
    gateway.apply.return_value = ApplySummary(
        total_updated=0,
        records=(
            ApplyRecord(
                entry_id="E1",
                entry_label="First",
                status=ApplyStatus.FAILED,
                error="Entry locked",
            ),
        ),
    )
    command = ReplaceCommand(
        _replace_args(),
        service_factory=service_factory,
        console=console,
    )

    assert not command.execute()
    assert "First: Entry locked" in _output(console)


def test_replace_command_fails_when_preview_fails(
    service_factory: Callable[[], FindReplaceService], gateway: MagicMock, console: Console
) -> None:
    gateway.preview.side_effect = LoadFailure("offline")
    command = ReplaceCommand(
        _replace_args(),
        service_factory=service_factory,
        console=console,
    )

    assert not command.execute()
