"""
Training plan database model.

One row per player and academy.  The plan tree is stored as JSON and
validated into :class:`app.schemas.training_plan.TrainingPlan` on read.
"""

import datetime
from typing import Optional

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field, SQLModel


class PlayerTrainingPlan(SQLModel, table=True):
    """A coach-authored plan for one player."""

    __tablename__ = "training_plans"
    __table_args__ = (UniqueConstraint("academy_id", "player_id", name="uq_training_plan_academy_player"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    academy_id: str = Field(nullable=False, max_length=64, index=True)
    player_id: str = Field(nullable=False, max_length=64, index=True)

    # {"types": {Type: {"percent_of_total": .., "areas": {...}}}}
    plan: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False), )

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
