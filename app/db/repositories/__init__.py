"""Database repositories."""

from app.db.repositories.training_data import TrainingDataRepository

__all__ = [
    "TrainingDataRepository",
]
