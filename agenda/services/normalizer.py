"""Service for building lookup structures over a raw schedule."""

from __future__ import annotations

from agenda.domain.models import NormalizedSchedule, Room, ScheduleData, Session, Speaker


def sort_rooms(rooms: list[Room]) -> list[Room]:
    """Rooms by ``sort`` ascending; ties keep their input order."""
    return sorted(rooms, key=lambda room: room.sort)


def normalize_schedule(
    sessions: list[Session], rooms: list[Room], speakers: list[Speaker]
) -> NormalizedSchedule:
    """Index rooms, speakers and sessions for constant-time lookups.

    Duplicate room or speaker ids are last-write-wins. Sessions whose room
    id is unknown are kept in ``sessions`` but appear in no room bucket.
    """
    room_map = {room.id: room for room in rooms}
    speaker_map = {speaker.id: speaker for speaker in speakers}

    sessions_by_room: dict[int, list[Session]] = {room.id: [] for room in rooms}
    for session in sessions:
        bucket = sessions_by_room.get(session.room_id)
        if bucket is not None:
            bucket.append(session)

    boundaries = {session.starts_at for session in sessions}
    boundaries.update(session.ends_at for session in sessions)

    return NormalizedSchedule(
        rooms=sort_rooms(rooms),
        sessions=list(sessions),
        time_slots=sorted(boundaries),
        room_map=room_map,
        sessions_by_room=sessions_by_room,
        speaker_map=speaker_map,
    )


def normalize_schedule_data(data: ScheduleData) -> NormalizedSchedule:
    return normalize_schedule(data.sessions, data.rooms, data.speakers)
