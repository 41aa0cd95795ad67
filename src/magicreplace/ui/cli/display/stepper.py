"""src/magicreplace/ui/cli/display/stepper.py
What: Render the four workflow stages with the current one highlighted.
Why: Show users where they are in the run before each stage's output.
"""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from magicreplace.features.find_replace import WorkflowStage

_ICONS: dict[WorkflowStage, str] = {
    WorkflowStage.SELECT: "🖱️",
    WorkflowStage.SCAN: "🔍",
    WorkflowStage.PREVIEW: "👁️",
    WorkflowStage.APPLY: "📋",
}


def build_stepper(current: WorkflowStage) -> Text:
    """Build a one-line stepper; reached stages are blue, later ones dim."""

    text = Text()
    stages = list(WorkflowStage)
    for stage in stages:
        reached = stage.position <= current.position
        style = "bold blue" if reached else "dim"
        _ = text.append(f"{_ICONS[stage]} {stage.display_title}", style=style)
        if stage is not stages[-1]:
            connector_style = "blue" if stage.position < current.position else "dim"
            _ = text.append(" ── ", style=connector_style)
    return text


def render_stepper(console: Console, current: WorkflowStage) -> None:
    console.print()
    console.print(build_stepper(current))
    console.print()
