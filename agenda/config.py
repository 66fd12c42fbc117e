"""Runtime settings, read from ``AGENDA_*`` environment variables."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, model_validator

_ENV_PREFIX = "AGENDA_"


class Settings(BaseModel):
    day_start_hour: int = 9
    day_end_hour: int = 18
    block_minutes: int = 10
    schedule_url: str | None = None
    fetch_timeout: float = 5.0
    selection_path: Path | None = None
    live_refresh_seconds: float | None = None
    ics_uid_suffix: str = "@aiewf"
    log_level: str = "INFO"

    @model_validator(mode="after")
    def _check_grid(self) -> Settings:
        if not 0 <= self.day_start_hour < self.day_end_hour <= 24:
            raise ValueError("day hours must satisfy 0 <= start < end <= 24")
        if self.block_minutes <= 0 or 60 % self.block_minutes:
            raise ValueError("block_minutes must evenly divide 60")
        return self


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """Build Settings from the environment; unset variables keep defaults."""
    env = os.environ if environ is None else environ
    values = {
        name: env[_ENV_PREFIX + name.upper()]
        for name in Settings.model_fields
        if env.get(_ENV_PREFIX + name.upper())
    }
    return Settings(**values)
