"""Service for restricting a schedule to one calendar day."""

from __future__ import annotations

from datetime import date, datetime

from dateutil.rrule import DAILY, rrule

from agenda.domain.models import ConferenceDay, DaySchedule, ScheduleData
from agenda.services.normalizer import sort_rooms


def schedule_for_day(data: ScheduleData | DaySchedule, day: date) -> DaySchedule:
    """Sessions starting on *day* and the rooms they use.

    Days are compared by calendar date of ``starts_at``, never by instant.
    Rooms keep display order; rooms unused that day are left out.
    """
    sessions = [s for s in data.sessions if s.starts_at.date() == day]
    used_room_ids = {s.room_id for s in sessions}
    rooms = [room for room in sort_rooms(data.rooms) if room.id in used_room_ids]
    return DaySchedule(
        day=day, sessions=sessions, rooms=rooms, speakers=list(data.speakers)
    )


def day_label(day: date) -> str:
    """``Tuesday, June 3, 2025``."""
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"


def list_conference_days(data: ScheduleData) -> list[ConferenceDay]:
    """Every calendar day from the first to the last session start."""
    if not data.sessions:
        return []

    start_dates = [s.starts_at.date() for s in data.sessions]
    first, last = min(start_dates), max(start_dates)
    counts: dict[date, int] = {}
    for d in start_dates:
        counts[d] = counts.get(d, 0) + 1

    days: list[ConferenceDay] = []
    for dt in rrule(
        DAILY,
        dtstart=datetime.combine(first, datetime.min.time()),
        until=datetime.combine(last, datetime.min.time()),
    ):
        d = dt.date()
        days.append(ConferenceDay(day=d, label=day_label(d), session_count=counts.get(d, 0)))
    return days
