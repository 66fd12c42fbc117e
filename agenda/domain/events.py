"""Selection events raised by the UI layer."""

from __future__ import annotations

from pydantic import BaseModel


class SessionSelected(BaseModel):
    """Fired when the user adds a session to their schedule."""

    session_id: str


class SessionDeselected(BaseModel):
    """Fired when the user removes a session from their schedule."""

    session_id: str


class SelectionReplaced(BaseModel):
    """Fired when the whole selection is overwritten at once."""

    session_ids: list[str]
