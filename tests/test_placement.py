"""Tests for grid placement and the cell walk."""

from __future__ import annotations

from datetime import datetime

import pytest

from agenda.domain.models import CellKind, Room, Session
from agenda.services.placement import build_cell_grid, build_event_grid_placements
from agenda.services.quantizer import TimeQuantizer

ROOMS = [Room(id=1, name="A", sort=0), Room(id=2, name="B", sort=1)]


def _make_session(
    session_id: str, start: tuple[int, int], end: tuple[int, int], room_id: int = 1
) -> Session:
    return Session(
        id=session_id,
        title=session_id,
        starts_at=datetime(2025, 6, 3, *start),
        ends_at=datetime(2025, 6, 3, *end),
        room_id=room_id,
    )


@pytest.fixture()
def quantizer():
    return TimeQuantizer(9, 18, 10)


def test_single_session_placement(quantizer):
    placements = build_event_grid_placements([_make_session("s1", (9, 0), (10, 0))], ROOMS, quantizer)
    assert len(placements) == 1
    p = placements[0]
    assert (p.room_column, p.start_block, p.end_block) == (0, 0, 6)
    assert p.span == 6


def test_room_column_is_position_not_id(quantizer):
    rooms = [Room(id=2, name="B", sort=0), Room(id=1, name="A", sort=1)]
    placements = build_event_grid_placements([_make_session("s1", (9, 0), (10, 0), room_id=1)], rooms, quantizer)
    assert placements[0].room_column == 1


def test_session_in_undisplayed_room_is_skipped(quantizer):
    sessions = [
        _make_session("s1", (9, 0), (10, 0), room_id=1),
        _make_session("ghost", (9, 0), (10, 0), room_id=42),
    ]
    placements = build_event_grid_placements(sessions, ROOMS, quantizer)
    assert [p.session.id for p in placements] == ["s1"]


def test_session_partly_before_window_is_clipped(quantizer):
    placements = build_event_grid_placements([_make_session("early", (8, 30), (9, 30))], ROOMS, quantizer)
    assert (placements[0].start_block, placements[0].end_block) == (0, 3)


def test_session_partly_after_window_is_clipped(quantizer):
    placements = build_event_grid_placements([_make_session("late", (17, 30), (19, 0))], ROOMS, quantizer)
    assert (placements[0].start_block, placements[0].end_block) == (51, 54)


def test_session_fully_outside_window_has_no_placement(quantizer):
    sessions = [
        _make_session("breakfast", (7, 0), (9, 0)),
        _make_session("party", (18, 0), (20, 0)),
    ]
    assert build_event_grid_placements(sessions, ROOMS, quantizer) == []


def test_sub_block_session_spans_one_block(quantizer):
    placements = build_event_grid_placements([_make_session("short", (9, 0), (9, 5))], ROOMS, quantizer)
    assert (placements[0].start_block, placements[0].end_block) == (0, 1)


def test_every_placement_is_non_empty(quantizer):
    sessions = [
        _make_session("a", (9, 0), (9, 25)),
        _make_session("b", (10, 3), (10, 7), room_id=2),
        _make_session("c", (12, 45), (14, 15), room_id=2),
    ]
    placements = build_event_grid_placements(sessions, ROOMS, quantizer)
    assert len(placements) == 3
    assert all(p.start_block < p.end_block for p in placements)


def test_cell_grid_marks_start_continue_and_empty(quantizer):
    placements = build_event_grid_placements([_make_session("s1", (9, 10), (9, 40))], ROOMS, quantizer)
    grid = build_cell_grid(placements, quantizer.block_count(), len(ROOMS))
    assert len(grid) == 54
    assert grid[0][0].kind == CellKind.EMPTY
    assert grid[1][0].kind == CellKind.START
    assert grid[1][0].span == 3
    assert [grid[b][0].kind for b in (2, 3)] == [CellKind.CONTINUE, CellKind.CONTINUE]
    assert grid[4][0].kind == CellKind.EMPTY
    assert all(row[1].kind == CellKind.EMPTY for row in grid)


def test_cell_grid_first_starting_session_owns_collision(quantizer):
    sessions = [
        _make_session("later", (9, 30), (10, 30)),
        _make_session("earlier", (9, 0), (10, 0)),
    ]
    placements = build_event_grid_placements(sessions, ROOMS, quantizer)
    assert len(placements) == 2
    grid = build_cell_grid(placements, quantizer.block_count(), len(ROOMS))
    assert grid[0][0].session_id == "earlier"
    assert grid[3][0].session_id == "earlier"
    assert grid[3][0].kind == CellKind.CONTINUE
    assert grid[6][0].session_id == "later"
    assert grid[6][0].kind == CellKind.CONTINUE


def _make_overnight(session_id: str, start: tuple[int, int], end: tuple[int, int]) -> Session:
    return Session(
        id=session_id,
        title=session_id,
        starts_at=datetime(2025, 6, 3, *start),
        ends_at=datetime(2025, 6, 4, *end),
        room_id=1,
    )


def test_sessions_ending_after_midnight_run_to_window_end(quantizer):
    sessions = [
        _make_overnight("party", (17, 0), (0, 30)),
        _make_overnight("overnight", (17, 0), (10, 0)),
    ]
    placements = build_event_grid_placements(sessions, ROOMS, quantizer)
    assert {p.session.id: (p.start_block, p.end_block) for p in placements} == {
        "party": (48, 54),
        "overnight": (48, 54),
    }


def test_late_session_ending_after_midnight_has_no_placement(quantizer):
    placements = build_event_grid_placements(
        [_make_overnight("late", (23, 30), (0, 30))], ROOMS, quantizer
    )
    assert placements == []


def test_block_index_on_later_day_counts_whole_days(quantizer):
    day = datetime(2025, 6, 3).date()
    assert quantizer.block_index_on_day(datetime(2025, 6, 3, 10, 0), day) == 6
    assert quantizer.block_index_on_day(datetime(2025, 6, 4, 0, 30), day) == 93
