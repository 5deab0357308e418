"""
Base database configuration.

Import all models here so Alembic can detect them for migrations.
"""

# Import all models for Alembic autogenerate
from app.models.academy_settings import AcademySettings  # noqa: F401
from app.models.training_plan import PlayerTrainingPlan  # noqa: F401
from app.models.training_session import TrainingSession  # noqa: F401
