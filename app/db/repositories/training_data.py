"""
Training data repository.

SQLModel implementation of :class:`app.adherence.sources.TrainingDataSource`.
Database errors are re-raised as :class:`DataSourceError`.
"""

import datetime
from typing import Any, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from app.adherence.sources import DataSourceError
from app.core.logging import get_logger
from app.models.academy_settings import AcademySettings
from app.models.training_plan import PlayerTrainingPlan
from app.models.training_session import TrainingSession
from app.schemas.training_plan import TrainingPlan
from app.schemas.training_session import Session as SessionData
from app.schemas.training_session import parse_session, validate_session_record

logger = get_logger(__name__)


class TrainingDataRepository:
    """Reads plans, sessions and academy settings for the engine."""

    def __init__(self, session: Session):
        self.session = session

    # ------------------------------------------------------------------
    # Reads used by the engine
    # ------------------------------------------------------------------

    def get_training_plan(self, academy_id: str, player_id: str) -> Optional[TrainingPlan]:
        row = self._get_plan_row(academy_id, player_id)
        if row is None:
            return None
        return TrainingPlan.model_validate(
            {**row.plan, "player_id": row.player_id, "created_at": row.created_at, "updated_at": row.updated_at, })

    def get_sessions(self, academy_id: str, player_id: str, since: datetime.datetime, ) -> list[SessionData]:
        statement = (select(TrainingSession).where(TrainingSession.academy_id == academy_id,
                                                   TrainingSession.date >= since, ).order_by(
            TrainingSession.date.desc()))
        try:
            rows = list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            raise DataSourceError(f"Could not read sessions for academy '{academy_id}'") from e

        sessions: list[SessionData] = []
        for row in rows:
            try:
                parsed = parse_session({**row.data, "id": str(row.id), "date": row.date})
            except ValidationError as e:
                logger.warning("Skipping malformed session %s: %s", row.id, e.error_count(),
                               extra={"ctx_session_id": row.id}, )
                continue
            if parsed.involves(player_id):
                sessions.append(parsed)
        return sessions

    def get_analysis_window_days(self, academy_id: str) -> Optional[int]:
        statement = select(AcademySettings).where(AcademySettings.academy_id == academy_id)
        try:
            row = self.session.exec(statement).first()
        except SQLAlchemyError as e:
            raise DataSourceError(f"Could not read settings for academy '{academy_id}'") from e
        return row.analysis_window_days if row else None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def save_plan(self, academy_id: str, player_id: str, plan: TrainingPlan) -> PlayerTrainingPlan:
        payload = plan.model_dump(mode="json", include={"types"})
        row = self._get_plan_row(academy_id, player_id)
        if row is None:
            row = PlayerTrainingPlan(academy_id=academy_id, player_id=player_id, plan=payload)
        else:
            row.plan = payload
            row.updated_at = datetime.datetime.utcnow()
        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)
        return row

    def add_session(self, academy_id: str, raw: dict[str, Any]) -> TrainingSession:
        """Store a session record in its logged shape, after validating it."""
        record = validate_session_record(raw)
        parsed = record.to_session()
        entry = TrainingSession(academy_id=academy_id, date=parsed.date,
                                data=record.model_dump(mode="json", exclude_none=True), )
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def set_analysis_window_days(self, academy_id: str, days: int) -> AcademySettings:
        row = self.session.exec(select(AcademySettings).where(AcademySettings.academy_id == academy_id)).first()
        if row is None:
            row = AcademySettings(academy_id=academy_id, analysis_window_days=days)
        else:
            row.analysis_window_days = days
        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)
        return row

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_plan_row(self, academy_id: str, player_id: str) -> Optional[PlayerTrainingPlan]:
        statement = select(PlayerTrainingPlan).where(PlayerTrainingPlan.academy_id == academy_id,
                                                     PlayerTrainingPlan.player_id == player_id, )
        try:
            return self.session.exec(statement).first()
        except SQLAlchemyError as e:
            raise DataSourceError(f"Could not read plan for player '{player_id}'") from e
