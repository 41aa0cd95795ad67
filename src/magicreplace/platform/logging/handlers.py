"""Where: platform/logging/handlers.py
What: Rich console handler that renders workflow events with icons and colours.
Why: Keep notice formatting out of the session and the CLI commands.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class WorkflowRichHandler(RichHandler):
    """Rich handler with dedicated rendering for ``workflow_event`` records."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "workflow.notice.info": ("ℹ️", "blue"),
        "workflow.notice.success": ("✅", "green"),
        "workflow.notice.warning": ("⚠️", "yellow"),
        "workflow.notice.error": ("❌", "red"),
        "workflow.stage.changed": ("➡️", "cyan"),
        "workflow.response.stale": ("⏳", "magenta"),
    }

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize the handler with custom settings.

        Args:
            *args: Positional arguments to pass to RichHandler.
            **kwargs: Keyword arguments to pass to RichHandler.
        """
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    def _render_workflow_message(self, record: logging.LogRecord, message: str) -> Text | None:
        """Render structured workflow events with dedicated styling."""

        event = getattr(record, "workflow_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))

        if event.startswith("workflow.notice"):
            title = getattr(record, "notice_title", None)
            description = getattr(record, "notice_description", None)
            if title:
                _ = text.append(str(title), style=Style(color=color, bold=True))
                if description:
                    _ = text.append(": ", style=Style(color=color))
            if description:
                _ = text.append(str(description), style=Style(color=color))
            if not title and not description:
                _ = text.append(message, style=Style(color=color))
            return text

        if event == "workflow.stage.changed":
            previous = getattr(record, "previous_stage", None)
            current = getattr(record, "current_stage", None)
            _ = text.append("Stage ", style=Style(color=color))
            if previous:
                _ = text.append(str(previous), style=Style(color="white"))
                _ = text.append(" → ", style=Style(color=color))
            _ = text.append(str(current or "?"), style=Style(color="white", bold=True))
            return text

        _ = text.append(message, style=Style(color=color))
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render message with custom styling for workflow events."""

        workflow_text = self._render_workflow_message(record, message)
        if workflow_text is not None:
            return workflow_text

        return super().render_message(record, message)


__all__ = ["WorkflowRichHandler"]
