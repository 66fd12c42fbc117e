"""Service for loading schedule data: remote fetch with a bundled fallback."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from agenda.domain.models import Room, ScheduleData, Session, Speaker

logger = logging.getLogger(__name__)

BUNDLED_SCHEDULE_PATH = Path(__file__).resolve().parent.parent / "data" / "schedule.json"

_rooms_adapter = TypeAdapter(list[Room])
_speakers_adapter = TypeAdapter(list[Speaker])


def is_valid_payload(payload: Any) -> bool:
    """A payload is usable when sessions, rooms and speakers are all lists."""
    return isinstance(payload, dict) and all(
        isinstance(payload.get(key), list) for key in ("sessions", "rooms", "speakers")
    )


def parse_schedule(payload: dict) -> ScheduleData:
    """Validate a structurally valid payload into ScheduleData.

    Rooms and speakers must all validate. Sessions are validated one by one
    and ill-formed records (bad fields, ``endsAt <= startsAt``) are dropped.
    """
    rooms = _rooms_adapter.validate_python(payload["rooms"])
    speakers = _speakers_adapter.validate_python(payload["speakers"])

    sessions: list[Session] = []
    for raw in payload["sessions"]:
        try:
            sessions.append(Session.model_validate(raw))
        except ValidationError as exc:
            session_id = raw.get("id") if isinstance(raw, dict) else None
            logger.warning(
                "Dropping ill-formed session %s: %s", session_id, exc.errors()[0]["msg"]
            )
    return ScheduleData(sessions=sessions, rooms=rooms, speakers=speakers)


def load_bundled_schedule(path: Path = BUNDLED_SCHEDULE_PATH) -> ScheduleData:
    with path.open(encoding="utf-8") as fh:
        return parse_schedule(json.load(fh))


def fetch_schedule(
    url: str, client: httpx.Client | None = None, timeout: float = 5.0
) -> Any:
    """GET *url* and return the decoded JSON body."""
    if client is None:
        with httpx.Client(timeout=timeout) as owned:
            response = owned.get(url)
    else:
        response = client.get(url, timeout=timeout)
    response.raise_for_status()
    return response.json()


def load_schedule(
    url: str | None = None,
    client: httpx.Client | None = None,
    timeout: float = 5.0,
    fallback_path: Path = BUNDLED_SCHEDULE_PATH,
) -> ScheduleData:
    """Fetch the remote schedule, falling back to the bundled dataset.

    Unreachable URLs, non-JSON bodies and payloads missing any of the three
    lists all fall back; so do rooms or speakers that fail validation.
    """
    if url:
        try:
            payload = fetch_schedule(url, client=client, timeout=timeout)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Schedule fetch from %s failed (%s); using bundled data", url, exc)
        else:
            if is_valid_payload(payload):
                try:
                    return parse_schedule(payload)
                except ValidationError as exc:
                    logger.warning(
                        "Schedule from %s failed validation (%d errors); using bundled data",
                        url,
                        exc.error_count(),
                    )
            else:
                logger.warning("Schedule from %s is missing required lists; using bundled data", url)
    return load_bundled_schedule(fallback_path)
