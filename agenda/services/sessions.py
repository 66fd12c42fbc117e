"""Service for resolving a session's room and speakers."""

from __future__ import annotations

from agenda.domain.models import NormalizedSchedule, SessionDetail


def session_detail(schedule: NormalizedSchedule, session_id: str) -> SessionDetail | None:
    """Return the session with its room and speakers, or None if unknown.

    Speaker ids with no matching speaker are left out.
    """
    session = next((s for s in schedule.sessions if s.id == session_id), None)
    if session is None:
        return None

    speakers = [
        speaker
        for speaker in (schedule.get_speaker(sid) for sid in session.speaker_ids)
        if speaker is not None
    ]
    return SessionDetail(
        session=session, room=schedule.get_room(session.room_id), speakers=speakers
    )
