"""Plan-adherence engine: plan flattening, session aggregation, deviation ranking, group summary."""

from app.adherence.config import AdherenceConfig
from app.adherence.engine import (
    RecommendationCache,
    compute_batch_recommendations,
    compute_player_recommendations,
)
from app.adherence.group import compute_group_recommendations

__all__ = [
    "AdherenceConfig",
    "RecommendationCache",
    "compute_batch_recommendations",
    "compute_group_recommendations",
    "compute_player_recommendations",
]
