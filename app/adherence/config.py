"""Engine configuration: thresholds and analysis window."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from app.core.config import settings

# Deviations below this many percentage points are not reported.
_SIGNIFICANCE_THRESHOLD = 10.0

# Deviations at or above this many points are high priority.
_HIGH_PRIORITY_THRESHOLD = 25.0

_MAX_RECOMMENDATIONS = 5

# A deviation is reported for the group once this many players share it.
_MIN_GROUP_PLAYERS = 2


class AdherenceConfig(BaseModel):
    """Configuration for the plan-adherence computation.

    Injected everywhere instead of module constants so tests and academies
    can override any of it.
    """

    analysis_window_days: int = Field(default_factory=lambda: settings.ANALYSIS_WINDOW_DAYS, ge=1, le=365)
    significance_threshold: float = Field(_SIGNIFICANCE_THRESHOLD, gt=0.0)
    high_priority_threshold: float = Field(_HIGH_PRIORITY_THRESHOLD, gt=0.0)
    max_recommendations: int = Field(_MAX_RECOMMENDATIONS, ge=1)
    max_sessions: Optional[int] = Field(None, ge=1, description="Analyse only the N most recent sessions", )
    min_group_players: int = Field(_MIN_GROUP_PLAYERS, ge=2, description="Players needed for a shared deviation")


# Singleton default config
DEFAULT_CONFIG = AdherenceConfig()
