"""
Session aggregation: actual time distribution.

Sums the minutes a player spent per type, type+area and
type+area+exercise inside the analysis window, then expresses every
bucket as a percentage of the total analysed minutes.  Keys follow the
scheme of :func:`app.adherence.plan.hierarchical_key`, so the result can be
compared level by level with a flattened plan.

Everything here is a pure function of its inputs.
"""

from __future__ import annotations

import datetime
from collections import defaultdict
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from app.adherence.duration import parse_duration_minutes
from app.adherence.plan import hierarchical_key
from app.schemas.training_session import Session


class AnalysisWindow(BaseModel):
    """Closed interval ``[start, end]`` of analysed session dates."""

    start: datetime.datetime
    end: datetime.datetime

    @classmethod
    def ending_at(cls, end: datetime.datetime, days: int) -> "AnalysisWindow":
        return cls(start=end - datetime.timedelta(days=days), end=end)


class SessionAggregate(BaseModel):
    """Aggregated minutes for one player and window."""

    percentages: dict[str, float] = Field(default_factory=dict)
    total_minutes: float = 0.0
    exercise_count: int = 0
    session_count: int = 0


# ======================================================================
# Session selection
# ======================================================================


def select_player_sessions(sessions: Iterable[Session], player_id: str, window: AnalysisWindow,
                           max_sessions: Optional[int] = None, ) -> list[Session]:
    """Sessions that count for *player_id* in *window*, most recent first.

    A session qualifies when the player owns or attends it, it is dated on
    or after the window start, and it logs at least one exercise.
    ``max_sessions`` keeps only the most recent ones.
    """
    qualifying = [s for s in sessions if s.involves(player_id) and s.date >= window.start and s.exercises]
    qualifying.sort(key=lambda s: s.date, reverse=True)
    if max_sessions is not None:
        qualifying = qualifying[:max_sessions]
    return qualifying


# ======================================================================
# Minute accumulation
# ======================================================================


def _accumulate_minutes(sessions: Iterable[Session]) -> tuple[dict[str, float], float, int]:
    """Return ``(minutes per key, total minutes, exercise count)``."""
    buckets: dict[str, float] = defaultdict(float)
    total = 0.0
    exercise_count = 0

    for session in sessions:
        for entry in session.exercises:
            minutes = parse_duration_minutes(entry.duration)
            exercise_count += 1
            total += minutes

            buckets[hierarchical_key(entry.type)] += minutes
            buckets[hierarchical_key(entry.type, entry.area)] += minutes
            if entry.exercise:
                buckets[hierarchical_key(entry.type, entry.area, entry.exercise)] += minutes

    return dict(buckets), total, exercise_count


def _to_percentages(buckets: dict[str, float], total: float) -> dict[str, float]:
    if total <= 0:
        return {}
    return {key: minutes * 100.0 / total for key, minutes in buckets.items()}


# ======================================================================
# Entry points
# ======================================================================


def aggregate_sessions(sessions: Iterable[Session], player_id: str, window: AnalysisWindow,
                       max_sessions: Optional[int] = None, ) -> SessionAggregate:
    """Select the player's sessions and aggregate their minutes.

    Returns:
        :class:`SessionAggregate`; ``percentages`` is empty when the total
        analysed time is zero.
    """
    selected = select_player_sessions(sessions, player_id, window, max_sessions)
    buckets, total, exercise_count = _accumulate_minutes(selected)
    return SessionAggregate(percentages=_to_percentages(buckets, total), total_minutes=total,
                            exercise_count=exercise_count, session_count=len(selected), )


def compute_actual_stats(sessions: Iterable[Session], player_id: str, window: AnalysisWindow,
                         max_sessions: Optional[int] = None, ) -> dict[str, float]:
    """Flat ``{hierarchical key: percent of analysed minutes}`` map."""
    return aggregate_sessions(sessions, player_id, window, max_sessions).percentages
