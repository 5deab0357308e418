"""SQLModel database models."""

from app.models.academy_settings import AcademySettings
from app.models.training_plan import PlayerTrainingPlan
from app.models.training_session import TrainingSession

__all__ = [
    "AcademySettings",
    "PlayerTrainingPlan",
    "TrainingSession",
]
