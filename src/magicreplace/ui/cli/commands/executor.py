"""src/magicreplace/ui/cli/commands/executor.py
What: Provide shared wiring for CLI command executors.
Why: Reuse the application service and displays across commands.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

from rich.console import Console

from magicreplace.application.services.find_replace_service import FindReplaceService


class CommandExecutor(ABC):
    """Base class for command execution."""

    app: FindReplaceService
    console: Console

    def __init__(
        self,
        *,
        service_factory: Callable[[], FindReplaceService] | None = None,
        console: Console | None = None,
    ) -> None:
        self.app = (service_factory or FindReplaceService)()
        self.console = console or Console()

    @abstractmethod
    def execute(self) -> bool:
        """Execute the command.

        Returns:
            True when every stage the command ran succeeded.
        """

    def close(self) -> None:
        """Release the connections opened while executing."""

        self.app.close()
