"""Service for exporting a projected schedule as an iCalendar file."""

from __future__ import annotations

from datetime import datetime

from ics import Calendar, Event

from agenda.domain.models import CalendarRecord, MySchedule

DEFAULT_UID_SUFFIX = "@aiewf"


def _as_parts(dt: datetime) -> tuple[int, int, int, int, int]:
    return (dt.year, dt.month, dt.day, dt.hour, dt.minute)


def build_calendar_records(
    my_schedule: MySchedule, uid_suffix: str = DEFAULT_UID_SUFFIX
) -> list[CalendarRecord]:
    """One record per projected session; location is the room name."""
    room_names = {room.id: room.name for room in my_schedule.rooms}
    return [
        CalendarRecord(
            start=_as_parts(session.starts_at),
            end=_as_parts(session.ends_at),
            title=session.title,
            description=session.description or "",
            location=room_names.get(session.room_id, ""),
            uid=session.id + uid_suffix,
        )
        for session in my_schedule.sessions
    ]


def export_ics(my_schedule: MySchedule, uid_suffix: str = DEFAULT_UID_SUFFIX) -> str:
    """Serialize the projection into an iCalendar document."""
    calendar = Calendar()
    for record in build_calendar_records(my_schedule, uid_suffix):
        event = Event(
            name=record.title,
            begin=datetime(*record.start),
            end=datetime(*record.end),
            uid=record.uid,
        )
        if record.description:
            event.description = record.description
        if record.location:
            event.location = record.location
        calendar.events.add(event)
    return calendar.serialize()
