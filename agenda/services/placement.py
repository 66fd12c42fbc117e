"""Service for placing day-scoped sessions onto the room/time grid."""

from __future__ import annotations

import logging

from agenda.domain.models import CellKind, EventGridPlacement, GridCell, Room, Session
from agenda.services.quantizer import TimeQuantizer

logger = logging.getLogger(__name__)


def build_event_grid_placements(
    sessions: list[Session], rooms: list[Room], quantizer: TimeQuantizer
) -> list[EventGridPlacement]:
    """Map each session to a room column and a half-open block range.

    ``room_column`` is the room's position in *rooms*, not its id. Sessions
    in rooms that are not displayed are skipped. Sessions partly outside
    the display window are clipped to it; sessions entirely outside it
    produce no placement. Every placement spans at least one block.

    Overlapping sessions in the same room are not split into sub-columns.
    """
    column_by_room = {room.id: column for column, room in enumerate(rooms)}
    block_count = quantizer.block_count()

    placements: list[EventGridPlacement] = []
    for session in sessions:
        column = column_by_room.get(session.room_id)
        if column is None:
            logger.debug(
                "Skipping session %s: room %s not displayed", session.id, session.room_id
            )
            continue

        # Both ends are measured on the grid of the session's start day.
        day = session.starts_at.date()
        start_block = quantizer.time_to_block_index(session.starts_at)
        end_block = quantizer.block_index_on_day(session.ends_at, day)
        if quantizer.minutes_into_window(session.ends_at, day) <= 0 or start_block >= block_count:
            logger.debug("Skipping session %s: outside the display window", session.id)
            continue

        start_block = max(start_block, 0)
        end_block = min(max(end_block, start_block + 1), block_count)
        placements.append(
            EventGridPlacement(
                session=session,
                room_column=column,
                start_block=start_block,
                end_block=end_block,
            )
        )
    return placements


def build_cell_grid(
    placements: list[EventGridPlacement], block_count: int, column_count: int
) -> list[list[GridCell]]:
    """``[block][column]`` matrix telling a renderer what each cell holds.

    When placements collide in one column, the first-starting one owns the
    contested cells (ties go to input order).
    """
    grid = [[GridCell() for _ in range(column_count)] for _ in range(block_count)]
    ordered = sorted(placements, key=lambda p: p.start_block)
    for placement in ordered:
        column = placement.room_column
        for block in range(placement.start_block, placement.end_block):
            if grid[block][column].kind != CellKind.EMPTY:
                continue
            if block == placement.start_block:
                grid[block][column] = GridCell(
                    kind=CellKind.START,
                    session_id=placement.session.id,
                    span=placement.span,
                )
            else:
                grid[block][column] = GridCell(
                    kind=CellKind.CONTINUE, session_id=placement.session.id
                )
    return grid
