"""Notifier adapter that routes workflow notices through the application logger."""

from __future__ import annotations

import logging
from logging import Logger
from typing import Final, final

from magicreplace.platform.logging import logger as app_logger

from ..usecases.ports import Notice, NoticeLevel

_LEVELS: Final[dict[NoticeLevel, int]] = {
    NoticeLevel.INFO: logging.INFO,
    NoticeLevel.SUCCESS: logging.INFO,
    NoticeLevel.WARNING: logging.WARNING,
    NoticeLevel.ERROR: logging.ERROR,
}


@final
class LoggingNotifier:
    """Emit each notice as a ``workflow.notice.*`` log record.

    The Rich console handler renders these records with an icon and colour
    per level; the file handler keeps a plain-text trail.
    """

    def __init__(self, logger: Logger | None = None) -> None:
        self._logger = logger or app_logger

    def notify(self, notice: Notice) -> None:
        self._logger.log(
            _LEVELS[notice.level],
            "%s: %s",
            notice.title,
            notice.description,
            extra={
                "workflow_event": f"workflow.notice.{notice.level.value}",
                "notice_title": notice.title,
                "notice_description": notice.description,
            },
        )


__all__ = ["LoggingNotifier"]
