"""Pydantic schemas for plans, sessions and recommendations."""

from app.schemas.recommendation import (
    BatchRecommendationRequest,
    BatchRecommendations,
    GroupRecommendation,
    PlanLevel,
    PlayerRecommendations,
    Priority,
    RecommendationItem,
    RecommendationKind,
)
from app.schemas.training_plan import AreaAllocation, TrainingPlan, TypeAllocation
from app.schemas.training_session import (
    ExerciseEntry,
    GroupSessionRecord,
    LegacySessionRecord,
    Participant,
    Session,
    parse_session,
)

__all__ = [
    "BatchRecommendationRequest",
    "BatchRecommendations",
    "GroupRecommendation",
    "PlanLevel",
    "PlayerRecommendations",
    "Priority",
    "RecommendationItem",
    "RecommendationKind",
    "AreaAllocation",
    "TrainingPlan",
    "TypeAllocation",
    "ExerciseEntry",
    "GroupSessionRecord",
    "LegacySessionRecord",
    "Participant",
    "Session",
    "parse_session",
]
