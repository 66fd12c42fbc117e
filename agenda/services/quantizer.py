"""Fixed-size time grid: converts timestamps to block indices and back."""

from __future__ import annotations

from datetime import date, datetime, time

from agenda.config import Settings
from agenda.domain.models import TimeBlock


class TimeQuantizer:
    """Discrete block grid from ``day_start_hour`` to ``day_end_hour``.

    ``block_minutes`` must evenly divide 60.
    """

    def __init__(
        self, day_start_hour: int = 9, day_end_hour: int = 18, block_minutes: int = 10
    ) -> None:
        if block_minutes <= 0 or 60 % block_minutes:
            raise ValueError("block_minutes must evenly divide 60")
        if not 0 <= day_start_hour < day_end_hour <= 24:
            raise ValueError("day hours must satisfy 0 <= start < end <= 24")
        self.day_start_hour = day_start_hour
        self.day_end_hour = day_end_hour
        self.block_minutes = block_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> TimeQuantizer:
        return cls(settings.day_start_hour, settings.day_end_hour, settings.block_minutes)

    @property
    def blocks_per_hour(self) -> int:
        return 60 // self.block_minutes

    def block_count(self) -> int:
        return (self.day_end_hour - self.day_start_hour) * self.blocks_per_hour

    def time_to_block_index(self, timestamp: datetime) -> int:
        """Block containing *timestamp*. Not clamped to ``[0, block_count())``."""
        return (
            timestamp.hour - self.day_start_hour
        ) * self.blocks_per_hour + timestamp.minute // self.block_minutes

    def minutes_into_window(self, timestamp: datetime, day: date | None = None) -> int:
        """Minutes from the window start on *day* (default: the timestamp's own day).

        Later calendar days count as whole days past the window start.
        """
        day_offset = 0 if day is None else (timestamp.date() - day).days
        return (
            day_offset * 24 * 60
            + (timestamp.hour - self.day_start_hour) * 60
            + timestamp.minute
        )

    def block_index_on_day(self, timestamp: datetime, day: date) -> int:
        """Like ``time_to_block_index`` but measured from the grid of *day*."""
        return self.minutes_into_window(timestamp, day) // self.block_minutes

    def block_index_to_time(self, index: int) -> time:
        hours, block = divmod(index, self.blocks_per_hour)
        return time(self.day_start_hour + hours, block * self.block_minutes)

    def block_index_to_timestamp(self, index: int, day: date) -> datetime:
        return datetime.combine(day, self.block_index_to_time(index))

    def block_index_to_label(self, index: int) -> str:
        """Human label for a block, e.g. ``9:00 am`` or ``12:30 pm``."""
        start = self.block_index_to_time(index)
        hour = start.hour % 12 or 12
        suffix = "am" if start.hour < 12 else "pm"
        return f"{hour}:{start.minute:02d} {suffix}"

    def time_blocks(self) -> list[TimeBlock]:
        blocks: list[TimeBlock] = []
        for index in range(self.block_count()):
            start = self.block_index_to_time(index)
            blocks.append(
                TimeBlock(
                    index=index,
                    hour=start.hour,
                    minute=start.minute,
                    label=self.block_index_to_label(index),
                )
            )
        return blocks
