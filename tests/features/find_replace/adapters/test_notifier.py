"""Tests for the logging notifier adapter."""

from __future__ import annotations

import logging

import pytest

from magicreplace.features.find_replace import Notice, NoticeLevel
from magicreplace.features.find_replace.adapters import LoggingNotifier


@pytest.mark.parametrize(
    "level, expected",
    [
        (NoticeLevel.INFO, logging.INFO),
        (NoticeLevel.SUCCESS, logging.INFO),
        (NoticeLevel.WARNING, logging.WARNING),
        (NoticeLevel.ERROR, logging.ERROR),
    ],
)
def test_notice_is_logged_with_workflow_extras(
    level: NoticeLevel,
    expected: int,
    caplog: pytest.LogCaptureFixture,
) -> None:
    test_logger = logging.getLogger("magicreplace.tests.notifier")
    caplog.set_level(logging.DEBUG, logger=test_logger.name)

    LoggingNotifier(test_logger).notify(Notice("Scan Complete", "Found 4 matches", level))

    record = caplog.records[-1]
    assert record.levelno == expected
    assert record.getMessage() == "Scan Complete: Found 4 matches"
    assert getattr(record, "workflow_event") == f"workflow.notice.{level.value}"
    assert getattr(record, "notice_title") == "Scan Complete"
    assert getattr(record, "notice_description") == "Found 4 matches"
