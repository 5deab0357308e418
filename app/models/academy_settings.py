"""Per-academy settings used by the recommendation engine."""

from typing import Optional

from sqlmodel import Field, SQLModel


class AcademySettings(SQLModel, table=True):
    __tablename__ = "academy_settings"

    id: Optional[int] = Field(default=None, primary_key=True)
    academy_id: str = Field(nullable=False, max_length=64, unique=True, index=True)

    # Days of history analysed for recommendations
    analysis_window_days: int = Field(default=7, ge=1, le=365)
