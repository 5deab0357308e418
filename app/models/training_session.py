"""
Training session database model.

Sessions are stored as raw JSON in whichever shape they were logged
(single-player legacy records or group records with participants).
``date`` is duplicated into its own column for range queries; player
membership is resolved after :func:`app.schemas.training_session.parse_session`.
"""

import datetime
from typing import Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class TrainingSession(SQLModel, table=True):
    """A logged training session."""

    __tablename__ = "training_sessions"

    id: Optional[int] = Field(default=None, primary_key=True)
    academy_id: str = Field(nullable=False, max_length=64, index=True)
    date: datetime.datetime = Field(nullable=False, index=True)

    # Stored session record (legacy or group shape)
    data: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False), )

    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
