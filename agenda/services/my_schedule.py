"""Service for projecting a day onto the sessions a user kept."""

from __future__ import annotations

from collections.abc import Iterable

from agenda.domain.models import MySchedule, Room, Session


def project_my_schedule(
    sessions: list[Session], rooms: list[Room], selected_ids: Iterable[str]
) -> MySchedule:
    """Selected sessions in schedule order, plus exactly the rooms they use.

    Click order of the selection never affects the result; rooms keep the
    order of *rooms*.
    """
    wanted = set(selected_ids)
    mine = [s for s in sessions if s.id in wanted]
    used_room_ids = {s.room_id for s in mine}

    my_rooms: list[Room] = []
    for room in rooms:
        if room.id in used_room_ids:
            my_rooms.append(room)
            used_room_ids.discard(room.id)
    return MySchedule(sessions=mine, rooms=my_rooms)
