"""In-memory repositories for schedule data and the user's selection."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable

from agenda.domain.models import NormalizedSchedule, ScheduleData
from agenda.repos.store import KeyValueStore
from agenda.services.normalizer import normalize_schedule_data

logger = logging.getLogger(__name__)

SELECTION_KEY = "selectedEventIds"


class ScheduleRepository:
    """Holds the currently loaded schedule and its normalized form."""

    def __init__(self, loader: Callable[[], ScheduleData]) -> None:
        self._loader = loader
        self._data: ScheduleData | None = None
        self._normalized: NormalizedSchedule | None = None

    def get(self) -> ScheduleData:
        if self._data is None:
            self.reload()
        return self._data

    def normalized(self) -> NormalizedSchedule:
        if self._normalized is None:
            self._normalized = normalize_schedule_data(self.get())
        return self._normalized

    def reload(self) -> ScheduleData:
        self._data = self._loader()
        self._normalized = None
        logger.info(
            "Loaded schedule: %d sessions, %d rooms, %d speakers",
            len(self._data.sessions),
            len(self._data.rooms),
            len(self._data.speakers),
        )
        return self._data

    def has_session(self, session_id: str) -> bool:
        return any(s.id == session_id for s in self.get().sessions)


class SelectionRepository:
    """Selected session ids, persisted as a JSON array under one key."""

    def __init__(self, store: KeyValueStore, key: str = SELECTION_KEY) -> None:
        self._store = store
        self._key = key

    def snapshot(self) -> tuple[str, ...]:
        raw = self._store.get(self._key)
        if raw is None:
            return ()
        try:
            ids = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring corrupt selection stored under %r", self._key)
            return ()
        if not isinstance(ids, list):
            logger.warning("Ignoring non-list selection stored under %r", self._key)
            return ()
        return tuple(str(i) for i in ids)

    def replace(self, session_ids: Iterable[str]) -> None:
        unique = list(dict.fromkeys(session_ids))
        self._store.set(self._key, json.dumps(unique))

    def add(self, session_id: str) -> None:
        current = self.snapshot()
        if session_id not in current:
            self.replace([*current, session_id])

    def remove(self, session_id: str) -> None:
        self.replace(i for i in self.snapshot() if i != session_id)

    def clear(self) -> None:
        self.replace([])
