"""Domain models for the conference agenda."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

try:
    from enum import StrEnum
except ImportError:  # pragma: no cover - fallback for older Python runtimes

    class StrEnum(str, Enum):
        pass


class ScheduleView(StrEnum):
    FULL = "full"
    MY = "my"


class CellKind(StrEnum):
    START = "start"
    CONTINUE = "continue"
    EMPTY = "empty"


class _WireModel(BaseModel):
    """Accepts camelCase wire keys or field names; dumps camelCase.

    Every API-facing model uses it so responses share one key casing.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Input models
# ---------------------------------------------------------------------------


class Room(_WireModel):
    id: int
    name: str
    sort: int = 0


class Speaker(_WireModel):
    id: str
    full_name: str
    bio: str | None = None
    tag_line: str | None = None
    profile_picture: str | None = None


class Session(_WireModel):
    id: str
    title: str
    description: str | None = None
    starts_at: datetime
    ends_at: datetime
    room_id: int
    speaker_ids: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("speakerIds", "speakers", "speaker_ids"),
    )

    @model_validator(mode="after")
    def _end_after_start(self) -> Session:
        if self.ends_at <= self.starts_at:
            raise ValueError("endsAt must be after startsAt")
        return self


class ScheduleData(_WireModel):
    sessions: list[Session] = Field(default_factory=list)
    rooms: list[Room] = Field(default_factory=list)
    speakers: list[Speaker] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Derived models
# ---------------------------------------------------------------------------


class TimeBlock(_WireModel):
    index: int
    hour: int
    minute: int
    label: str


class EventGridPlacement(_WireModel):
    session: Session
    room_column: int
    start_block: int
    end_block: int  # exclusive

    @property
    def span(self) -> int:
        return self.end_block - self.start_block


class NormalizedSchedule(_WireModel):
    rooms: list[Room]
    sessions: list[Session]
    time_slots: list[datetime]
    room_map: dict[int, Room]
    sessions_by_room: dict[int, list[Session]]
    speaker_map: dict[str, Speaker]

    def get_room(self, room_id: int) -> Room | None:
        return self.room_map.get(room_id)

    def get_speaker(self, speaker_id: str) -> Speaker | None:
        return self.speaker_map.get(speaker_id)


class DaySchedule(_WireModel):
    day: date
    sessions: list[Session]
    rooms: list[Room]
    speakers: list[Speaker]


class MySchedule(_WireModel):
    sessions: list[Session]
    rooms: list[Room]


class LivePosition(_WireModel):
    """Where the "now" line sits, in block coordinates."""

    block_index: int
    minute_offset: int
    position: float


class GridCell(_WireModel):
    kind: CellKind = CellKind.EMPTY
    session_id: str | None = None
    span: int = 0


class ConferenceDay(_WireModel):
    day: date
    label: str
    session_count: int


class SessionDetail(_WireModel):
    session: Session
    room: Room | None = None
    speakers: list[Speaker] = Field(default_factory=list)


class CalendarRecord(_WireModel):
    start: tuple[int, int, int, int, int]
    end: tuple[int, int, int, int, int]
    title: str
    description: str = ""
    location: str = ""
    uid: str


# ---------------------------------------------------------------------------
# Request / Response DTOs
# ---------------------------------------------------------------------------


class GridView(_WireModel):
    day: date
    view: ScheduleView
    rooms: list[Room]
    time_blocks: list[TimeBlock]
    placements: list[EventGridPlacement]
    cells: list[list[GridCell]]
    conflict_ids: list[str] = Field(default_factory=list)
    live_position: LivePosition | None = None
