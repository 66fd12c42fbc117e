"""Service for detecting time conflicts among a user's selected sessions."""

from __future__ import annotations

from collections.abc import Iterable

from agenda.domain.models import Session


def sessions_overlap(a: Session, b: Session) -> bool:
    """Half-open overlap: a.starts_at < b.ends_at AND b.starts_at < a.ends_at.

    Exact boundary touches (end == start) are NOT considered conflicts.
    """
    return a.starts_at < b.ends_at and b.starts_at < a.ends_at


def find_selection_conflicts(
    sessions: list[Session], selected_ids: Iterable[str]
) -> set[str]:
    """Ids of selected sessions that overlap at least one other selected session.

    Pairwise over the selection only, so cost is quadratic in the number of
    picks, not in the size of the schedule.
    """
    wanted = set(selected_ids)
    selected = [s for s in sessions if s.id in wanted]

    conflict_ids: set[str] = set()
    for i, first in enumerate(selected):
        for second in selected[i + 1 :]:
            if sessions_overlap(first, second):
                conflict_ids.add(first.id)
                conflict_ids.add(second.id)
    return conflict_ids
