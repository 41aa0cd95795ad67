"""Application service for guided find & replace runs.

This layer centralizes construction of the gateway, notifier and session so
that multiple UIs can drive the same workflow.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, final

from magicreplace.features.find_replace import (
    ContentStoreGateway,
    FindReplaceSession,
    Notifier,
)
from magicreplace.features.find_replace.adapters import HttpContentStoreGateway, LoggingNotifier
from magicreplace.platform.logging import logger


@dataclass(frozen=True)
class ReplaceRequest:
    """Input parameters for a find & replace run.

    Attributes:
        category_id: Category whose entries are searched.
        pattern: Text to look for.
        replacement: Replacement text; required for preview and apply.
        entry_ids: Entries to include. Empty means every entry of the category.
        smart_mode: Ask the content store for its alternate replacement strategy.
        include: ``(entry_id, field_name)`` pairs to select after preview,
            even when the policy rejected them.
        exclude: ``(entry_id, field_name)`` pairs to deselect after preview.
        only_included: Start from an empty selection so that only
            ``include`` pairs are applied.
    """

    category_id: str
    pattern: str
    replacement: str = ""
    entry_ids: tuple[str, ...] = ()
    smart_mode: bool = False
    include: tuple[tuple[str, str], ...] = ()
    exclude: tuple[tuple[str, str], ...] = ()
    only_included: bool = False


@final
class FindReplaceService:
    """Application façade that wires adapters into workflow sessions."""

    def __init__(
        self,
        *,
        gateway_factory: Callable[[], ContentStoreGateway] | None = None,
        notifier_factory: Callable[[], Notifier] | None = None,
    ) -> None:
        """Create a service with overridable infrastructure factories.

        Tests can inject light-weight doubles while production code relies on
        the HTTP gateway and the logging notifier.
        """

        self._gateway_factory: Callable[[], ContentStoreGateway] = (
            gateway_factory or HttpContentStoreGateway
        )
        self._notifier_factory: Callable[[], Notifier] = notifier_factory or LoggingNotifier
        self._gateways: list[ContentStoreGateway] = []

    def new_session(self) -> FindReplaceSession:
        gateway = self._gateway_factory()
        self._gateways.append(gateway)
        return FindReplaceSession(gateway=gateway, notifier=self._notifier_factory())

    def close(self) -> None:
        """Close every gateway opened for this service's sessions."""

        while self._gateways:
            self._gateways.pop().close()

    async def open(self, request: ReplaceRequest) -> FindReplaceSession | None:
        """Create a session positioned in ``select`` with the request's inputs.

        Returns:
            The prepared session, or ``None`` when the entries could not be
            loaded or none of the requested entries exist.
        """

        session = self.new_session()
        if not await session.choose_category(request.category_id):
            return None

        if request.entry_ids:
            known = {entry.id for entry in session.entries}
            for entry_id in request.entry_ids:
                if entry_id not in known:
                    logger.warning("Unknown entry %s in category %s", entry_id, request.category_id)
                    continue
                _ = session.select_entry(entry_id, True)
        else:
            _ = session.select_all_entries(True)

        if not session.selected_entry_ids:
            logger.warning("No entries selected in category %s", request.category_id)
            return None

        session.search_text = request.pattern
        session.replace_text = request.replacement
        session.smart_mode = request.smart_mode
        return session

    async def scan(self, request: ReplaceRequest) -> FindReplaceSession | None:
        """Run the scan stage; returns the session only when it reached ``scan``."""

        session = await self.open(request)
        if session is None or not await session.scan():
            return None
        return session

    async def preview(self, request: ReplaceRequest) -> FindReplaceSession | None:
        """Run the preview stage and apply the request's selection overrides."""

        session = await self.open(request)
        if session is None or not await session.preview():
            return None

        if request.only_included:
            _ = session.select_every_change(False)
        for entry_id, field_name in request.include:
            if not session.toggle_change(entry_id, field_name, True):
                logger.warning("Cannot include %s:%s; no such change", entry_id, field_name)
        for entry_id, field_name in request.exclude:
            if not session.toggle_change(entry_id, field_name, False):
                logger.warning("Cannot exclude %s:%s; no such change", entry_id, field_name)
        return session

    @staticmethod
    async def apply(session: FindReplaceSession) -> bool:
        return await session.apply()


__all__ = ["FindReplaceService", "ReplaceRequest"]
