"""Service for locating "now" on the grid of the day being viewed."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import date, datetime

from dateutil.relativedelta import relativedelta

from agenda.domain.models import LivePosition
from agenda.services.quantizer import TimeQuantizer

logger = logging.getLogger(__name__)


def compute_live_position(
    viewed_day: date, now: datetime, quantizer: TimeQuantizer
) -> LivePosition | None:
    """Block coordinates of *now*, or ``None`` when no indicator applies.

    No indicator unless *viewed_day* is today's calendar date and *now* is
    not before the window start. Times past the window end are returned
    unclamped (``block_index >= block_count()``) for the renderer to handle.
    """
    if viewed_day != now.date():
        return None
    if now.hour < quantizer.day_start_hour:
        return None

    block_index = quantizer.time_to_block_index(now)
    minute_offset = now.minute % quantizer.block_minutes
    return LivePosition(
        block_index=block_index,
        minute_offset=minute_offset,
        position=block_index + minute_offset / quantizer.block_minutes,
    )


def seconds_until_next_minute(now: datetime) -> float:
    next_minute = now + relativedelta(minutes=+1, second=0, microsecond=0)
    return (next_minute - now).total_seconds()


class LivePositionTicker:
    """Recomputes the live position for one viewed day until cancelled.

    The first value is delivered right away, then one per minute boundary
    (or every *interval* seconds when given).
    """

    def __init__(
        self,
        viewed_day: date,
        quantizer: TimeQuantizer,
        on_update: Callable[[LivePosition | None], Awaitable[None]],
        clock: Callable[[], datetime] = datetime.now,
        interval: float | None = None,
    ) -> None:
        self.viewed_day = viewed_day
        self.quantizer = quantizer
        self.on_update = on_update
        self.clock = clock
        self.interval = interval
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        logger.debug("Starting live-position ticker for %s", self.viewed_day)
        self._task = asyncio.get_running_loop().create_task(self._run())

    def cancel(self) -> None:
        if self._task is not None:
            logger.debug("Stopping live-position ticker for %s", self.viewed_day)
            self._task.cancel()
            self._task = None

    async def _run(self) -> None:
        while True:
            now = self.clock()
            try:
                await self.on_update(
                    compute_live_position(self.viewed_day, now, self.quantizer)
                )
            except Exception:
                logger.exception(
                    "Live-position update for %s failed; stopping ticker", self.viewed_day
                )
                return
            delay = self.interval if self.interval is not None else seconds_until_next_minute(now)
            await asyncio.sleep(delay)
