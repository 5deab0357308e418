"""
Shared API dependencies.

Reusable FastAPI dependencies for data access and the per-academy
recommendation caches.
"""

from fastapi import Depends, Request
from sqlmodel import Session

from app.adherence.engine import RecommendationCache
from app.adherence.sources import TrainingDataSource
from app.db.repositories.training_data import TrainingDataRepository
from app.db.session import get_db


def get_training_data(db: Session = Depends(get_db)) -> TrainingDataSource:
    """Data source backed by the application database."""
    return TrainingDataRepository(db)


def get_recommendation_cache(academy_id: str, request: Request) -> RecommendationCache:
    """The cache of *academy_id*, created on first use.

    Caches live on ``app.state`` and are only emptied through the
    cache-clearing endpoint.
    """
    caches: dict[str, RecommendationCache] = request.app.state.recommendation_caches
    if academy_id not in caches:
        caches[academy_id] = RecommendationCache()
    return caches[academy_id]
