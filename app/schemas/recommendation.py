"""
Plan-adherence recommendation schemas.

A recommendation is emitted for a planned key whose actual share of
training time deviates from the plan by at least the significance
threshold:

- ``difference = actual - planned`` (positive = excess, negative = deficit)
- ``REDUCE``: the player spends more time than planned
- ``INCREASE``: the player spends less time than planned
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, PrivateAttr


class PlanLevel(str, Enum):
    """Depth of the plan key a recommendation refers to."""
    TYPE = "type"
    AREA = "area"
    EXERCISE = "exercise"


class RecommendationKind(str, Enum):
    REDUCE = "REDUCE"
    INCREASE = "INCREASE"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"


class RecommendationItem(BaseModel):
    """One ranked deviation between plan and practice."""

    level: PlanLevel
    category: str = Field(..., description="Training type the key belongs to")
    subcategory: str = Field(..., description="Area name (the type name for type-level keys)")
    exercise: Optional[str] = None
    specific_exercise: Optional[str] = None
    current_percentage: float = Field(..., description="Actual share of analysed minutes")
    planned_percentage: float = Field(..., description="Planned share of total training")
    difference: float = Field(..., description="actual - planned in percentage points, one decimal")
    priority: Priority
    kind: RecommendationKind
    directive: str = Field("", description="Human-readable directive")

    # Unrounded actual - planned; decisions and ordering use it.
    _gap: Optional[float] = PrivateAttr(default=None)

    @property
    def gap(self) -> float:
        return self.difference if self._gap is None else self._gap


class PlayerRecommendations(BaseModel):
    """Terminal result of one player's analysis.

    Exactly one of these is produced per player and per invocation; callers
    inspect ``error`` instead of relying on exceptions.
    """

    is_new_player: bool = False
    has_active_plan: bool = False
    has_sessions: bool = False
    plan_adapted: bool = Field(False, description="Plan borrowed from another roster player")
    sessions_analyzed: int = 0
    recommendations: list[RecommendationItem] = Field(default_factory=list)
    summary: str = ""
    error: Optional[str] = None


class BatchRecommendationRequest(BaseModel):
    player_ids: list[str] = Field(..., min_length=1)


class GroupRecommendation(BaseModel):
    """A deviation shared by several players of one batch."""

    level: PlanLevel
    category: str
    subcategory: str
    exercise: Optional[str] = None
    specific_exercise: Optional[str] = None
    kind: RecommendationKind
    player_count: int = Field(..., ge=1)
    player_ids: list[str] = Field(default_factory=list)
    average_difference: float = Field(..., description="Mean difference across the players, one decimal")
    directive: str = ""


class BatchRecommendations(BaseModel):
    """Per-player results of a batch plus the deviations they share."""

    players: dict[str, PlayerRecommendations] = Field(default_factory=dict)
    group: list[GroupRecommendation] = Field(default_factory=list)
