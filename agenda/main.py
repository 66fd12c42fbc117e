"""FastAPI application: entry point for the conference agenda service."""

from __future__ import annotations

import logging
from datetime import date, datetime

from fastapi import Body, FastAPI, HTTPException, Response, WebSocket, WebSocketDisconnect

from agenda.config import load_settings
from agenda.domain.bus import EventBus
from agenda.domain.events import SelectionReplaced, SessionDeselected, SessionSelected
from agenda.domain.handlers import HandlerRegistry
from agenda.domain.models import (
    ConferenceDay,
    GridView,
    LivePosition,
    NormalizedSchedule,
    ScheduleView,
    SessionDetail,
)
from agenda.repos.memory import ScheduleRepository, SelectionRepository
from agenda.repos.store import JsonFileKeyValueStore, MemoryKeyValueStore
from agenda.services.day_scope import list_conference_days, schedule_for_day
from agenda.services.ics_export import export_ics
from agenda.services.live_position import LivePositionTicker, compute_live_position
from agenda.services.my_schedule import project_my_schedule
from agenda.services.quantizer import TimeQuantizer
from agenda.services.schedule_source import load_schedule
from agenda.services.sessions import session_detail
from agenda.services.views import build_grid_view

settings = load_settings()
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Conference Agenda Service")

# ── Singletons (created at import time for simplicity) ────────────────
quantizer = TimeQuantizer.from_settings(settings)
event_bus = EventBus()
schedule_repo = ScheduleRepository(
    lambda: load_schedule(settings.schedule_url, timeout=settings.fetch_timeout)
)
selection_repo = SelectionRepository(
    JsonFileKeyValueStore(settings.selection_path)
    if settings.selection_path
    else MemoryKeyValueStore()
)

handler_registry = HandlerRegistry(bus=event_bus, selection_repo=selection_repo)


def _require_session(session_id: str) -> None:
    if not schedule_repo.has_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")


# ── Routes ────────────────────────────────────────────────────────────


@app.get("/days", response_model=list[ConferenceDay])
def list_days() -> list[ConferenceDay]:
    """Return every conference day with its session count."""
    return list_conference_days(schedule_repo.get())


@app.get("/schedule", response_model=NormalizedSchedule)
def get_schedule() -> NormalizedSchedule:
    return schedule_repo.normalized()


@app.get("/days/{day}/grid", response_model=GridView)
def get_day_grid(
    day: date, view: ScheduleView = ScheduleView.FULL, now: datetime | None = None
) -> GridView:
    """Return the grid for one day, either the full agenda or "my" picks.

    Pass *now* to control the clock used for the live-position indicator.
    """
    return build_grid_view(
        schedule_for_day(schedule_repo.get(), day),
        selection_repo.snapshot(),
        view,
        quantizer,
        now or datetime.now(),
    )


@app.get("/days/{day}/live-position", response_model=LivePosition | None)
def get_live_position(day: date, now: datetime | None = None) -> LivePosition | None:
    return compute_live_position(day, now or datetime.now(), quantizer)


@app.websocket("/days/{day}/live")
async def live_position_feed(websocket: WebSocket, day: date) -> None:
    """Push the live position for *day* every minute until the client leaves."""
    await websocket.accept()

    async def send(position: LivePosition | None) -> None:
        await websocket.send_json(
            {"position": position.model_dump(by_alias=True) if position else None}
        )

    ticker = LivePositionTicker(
        day,
        quantizer,
        on_update=send,
        interval=settings.live_refresh_seconds,
    )
    ticker.start()
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug("Live feed for %s disconnected", day)
    finally:
        ticker.cancel()


@app.get("/sessions/{session_id}", response_model=SessionDetail)
def get_session(session_id: str) -> SessionDetail:
    """Return a session with its room and speakers."""
    detail = session_detail(schedule_repo.normalized(), session_id)
    if detail is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return detail


@app.get("/selection", response_model=list[str])
def get_selection() -> list[str]:
    return list(selection_repo.snapshot())


@app.put("/selection", response_model=list[str])
def replace_selection(session_ids: list[str] = Body(...)) -> list[str]:
    """Replace the whole selection; unknown ids are rejected."""
    for session_id in session_ids:
        _require_session(session_id)
    event_bus.publish(SelectionReplaced(session_ids=session_ids))
    return list(selection_repo.snapshot())


@app.post("/selection/{session_id}", response_model=list[str])
def select_session(session_id: str) -> list[str]:
    _require_session(session_id)
    event_bus.publish(SessionSelected(session_id=session_id))
    return list(selection_repo.snapshot())


@app.delete("/selection/{session_id}", response_model=list[str])
def deselect_session(session_id: str) -> list[str]:
    event_bus.publish(SessionDeselected(session_id=session_id))
    return list(selection_repo.snapshot())


@app.get("/days/{day}/my-schedule.ics")
def export_my_schedule(day: date) -> Response:
    """Download the selected sessions for *day* as an iCalendar file."""
    day_schedule = schedule_for_day(schedule_repo.get(), day)
    mine = project_my_schedule(
        day_schedule.sessions, day_schedule.rooms, selection_repo.snapshot()
    )
    if not mine.sessions:
        raise HTTPException(status_code=404, detail="No events to export")
    return Response(
        content=export_ics(mine, settings.ics_uid_suffix),
        media_type="text/calendar",
        headers={"Content-Disposition": 'attachment; filename="my-schedule.ics"'},
    )
