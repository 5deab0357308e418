"""
Data-source port.

The engine reads plans and sessions through :class:`TrainingDataSource`.
Each call is a single shot: no retry, no timeout.  Implementations raise
:class:`DataSourceError` (or anything else) on failure; the orchestrator
turns failures into per-player error results.
"""

from __future__ import annotations

import datetime
from typing import Iterable, Mapping, Optional, Protocol, runtime_checkable

from app.schemas.training_plan import TrainingPlan
from app.schemas.training_session import Session, parse_session


class DataSourceError(Exception):
    """A plan or session read failed."""


@runtime_checkable
class TrainingDataSource(Protocol):
    def get_training_plan(self, academy_id: str, player_id: str) -> Optional[TrainingPlan]:
        ...

    def get_sessions(self, academy_id: str, player_id: str, since: datetime.datetime, ) -> list[Session]:
        ...

    def get_analysis_window_days(self, academy_id: str) -> Optional[int]:
        ...


class InMemoryTrainingData:
    """Dictionary-backed source for scripts and tests.

    Sessions are accepted in either stored shape and normalised on
    insertion.
    """

    def __init__(self, plans: Optional[Mapping[tuple[str, str], TrainingPlan]] = None,
                 sessions: Optional[Mapping[str, Iterable[object]]] = None,
                 window_days: Optional[Mapping[str, int]] = None, ):
        self.plans: dict[tuple[str, str], TrainingPlan] = dict(plans or {})
        self.sessions: dict[str, list[Session]] = {academy: [parse_session(s) for s in items] for academy, items in
                                                   (sessions or {}).items()}
        self.window_days: dict[str, int] = dict(window_days or {})

    def add_plan(self, academy_id: str, player_id: str, plan: TrainingPlan) -> None:
        self.plans[(academy_id, player_id)] = plan

    def add_session(self, academy_id: str, raw: object) -> Session:
        session = parse_session(raw)
        self.sessions.setdefault(academy_id, []).append(session)
        return session

    def get_training_plan(self, academy_id: str, player_id: str) -> Optional[TrainingPlan]:
        return self.plans.get((academy_id, player_id))

    def get_sessions(self, academy_id: str, player_id: str, since: datetime.datetime, ) -> list[Session]:
        return [s for s in self.sessions.get(academy_id, []) if s.involves(player_id) and s.date >= since]

    def get_analysis_window_days(self, academy_id: str) -> Optional[int]:
        return self.window_days.get(academy_id)
