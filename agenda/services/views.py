"""Service assembling everything a renderer needs for one day's grid."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from agenda.domain.models import DaySchedule, GridView, ScheduleView
from agenda.services.conflicts import find_selection_conflicts
from agenda.services.live_position import compute_live_position
from agenda.services.my_schedule import project_my_schedule
from agenda.services.placement import build_cell_grid, build_event_grid_placements
from agenda.services.quantizer import TimeQuantizer


def build_grid_view(
    day_schedule: DaySchedule,
    selected_ids: Iterable[str],
    view: ScheduleView,
    quantizer: TimeQuantizer,
    now: datetime,
) -> GridView:
    """Rooms, placements, cells, conflicts and live position for one day.

    The "my" view is restricted to the selection and never runs conflict
    detection.
    """
    selection = tuple(selected_ids)
    sessions, rooms = day_schedule.sessions, day_schedule.rooms
    conflict_ids: list[str] = []

    if view == ScheduleView.MY:
        mine = project_my_schedule(sessions, rooms, selection)
        sessions, rooms = mine.sessions, mine.rooms
    else:
        conflicts = find_selection_conflicts(sessions, selection)
        conflict_ids = [s.id for s in sessions if s.id in conflicts]

    placements = build_event_grid_placements(sessions, rooms, quantizer)
    return GridView(
        day=day_schedule.day,
        view=view,
        rooms=rooms,
        time_blocks=quantizer.time_blocks(),
        placements=placements,
        cells=build_cell_grid(placements, quantizer.block_count(), len(rooms)),
        conflict_ids=conflict_ids,
        live_position=compute_live_position(day_schedule.day, now, quantizer),
    )
