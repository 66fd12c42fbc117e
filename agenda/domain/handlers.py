"""Selection event handlers, wired up at application startup."""

from __future__ import annotations

import logging

from agenda.domain.bus import EventBus
from agenda.domain.events import SelectionReplaced, SessionDeselected, SessionSelected
from agenda.repos.memory import SelectionRepository

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Applies selection events to the selection store."""

    def __init__(self, bus: EventBus, selection_repo: SelectionRepository) -> None:
        self.bus = bus
        self.selection_repo = selection_repo
        self._register()

    def _register(self) -> None:
        self.bus.subscribe(SessionSelected, self.on_session_selected)
        self.bus.subscribe(SessionDeselected, self.on_session_deselected)
        self.bus.subscribe(SelectionReplaced, self.on_selection_replaced)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def on_session_selected(self, event: SessionSelected) -> None:
        self.selection_repo.add(event.session_id)
        logger.info("Selected session %s", event.session_id)

    def on_session_deselected(self, event: SessionDeselected) -> None:
        self.selection_repo.remove(event.session_id)
        logger.info("Deselected session %s", event.session_id)

    def on_selection_replaced(self, event: SelectionReplaced) -> None:
        self.selection_repo.replace(event.session_ids)
        logger.info("Selection replaced (%d sessions)", len(event.session_ids))
