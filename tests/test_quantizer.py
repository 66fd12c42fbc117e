"""Tests for the time-grid quantizer and its settings."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from agenda.config import Settings, load_settings
from agenda.services.quantizer import TimeQuantizer

DAY = date(2025, 6, 3)


def test_block_count_default_grid():
    """09:00–18:00 in 10-minute blocks is 54 blocks."""
    assert TimeQuantizer(9, 18, 10).block_count() == 54


def test_time_to_block_index():
    q = TimeQuantizer(9, 18, 10)
    assert q.time_to_block_index(datetime(2025, 6, 3, 9, 0)) == 0
    assert q.time_to_block_index(datetime(2025, 6, 3, 9, 19)) == 1
    assert q.time_to_block_index(datetime(2025, 6, 3, 10, 0)) == 6


def test_time_to_block_index_is_not_clamped():
    q = TimeQuantizer(9, 18, 10)
    assert q.time_to_block_index(datetime(2025, 6, 3, 8, 50)) == -1
    assert q.time_to_block_index(datetime(2025, 6, 3, 18, 0)) == q.block_count()


@pytest.mark.parametrize("block_minutes", [5, 10, 15, 30])
def test_block_index_round_trips_through_timestamp(block_minutes):
    q = TimeQuantizer(9, 18, block_minutes)
    for index in range(q.block_count()):
        assert q.time_to_block_index(q.block_index_to_timestamp(index, DAY)) == index


def test_block_labels():
    q = TimeQuantizer(9, 18, 10)
    assert q.block_index_to_label(0) == "9:00 am"
    assert q.block_index_to_label(17) == "11:50 am"
    assert q.block_index_to_label(18) == "12:00 pm"
    assert q.block_index_to_label(27) == "1:30 pm"


def test_time_blocks_cover_grid():
    blocks = TimeQuantizer(9, 10, 15).time_blocks()
    assert [(b.index, b.hour, b.minute) for b in blocks] == [
        (0, 9, 0),
        (1, 9, 15),
        (2, 9, 30),
        (3, 9, 45),
    ]


def test_block_size_must_divide_hour():
    with pytest.raises(ValueError, match="evenly divide 60"):
        TimeQuantizer(9, 18, 7)


def test_settings_defaults():
    settings = load_settings({})
    assert (settings.day_start_hour, settings.day_end_hour, settings.block_minutes) == (9, 18, 10)
    assert settings.schedule_url is None
    assert settings.selection_path is None


def test_settings_from_environment():
    settings = load_settings(
        {
            "AGENDA_DAY_START_HOUR": "8",
            "AGENDA_BLOCK_MINUTES": "5",
            "AGENDA_SCHEDULE_URL": "https://example.com/schedule.json",
        }
    )
    assert settings.day_start_hour == 8
    assert settings.block_minutes == 5
    assert settings.schedule_url == "https://example.com/schedule.json"
    assert TimeQuantizer.from_settings(settings).block_count() == 10 * 12


def test_settings_reject_bad_grid():
    with pytest.raises(ValueError):
        Settings(day_start_hour=18, day_end_hour=9)
    with pytest.raises(ValueError):
        load_settings({"AGENDA_BLOCK_MINUTES": "25"})
