"""
Plan vs. practice comparison.

Only keys present in the **plan** are evaluated.  Activity the plan does
not mention is never flagged directly; it shows up as a shortfall on the
planned keys it displaced.

For each planned key::

    difference = actual - planned      (positive = excess, negative = deficit)

    |difference| <  significance      -> ignored
    difference   >  0                 -> REDUCE
    difference   <  0                 -> INCREASE
    |difference| >= high threshold    -> HIGH, otherwise MEDIUM

Decisions and ordering use the unrounded difference; only float noise
below ``_TOLERANCE`` is absorbed.  Items carry values rounded to one
decimal for display.
"""

from __future__ import annotations

import math
from typing import Iterable, Mapping, Optional

from app.adherence.config import DEFAULT_CONFIG, AdherenceConfig
from app.adherence.formatting import format_directive
from app.adherence.plan import split_key
from app.schemas.recommendation import (
    PlanLevel,
    Priority,
    RecommendationItem,
    RecommendationKind,
)

_TOLERANCE = 1e-9


def _at_least(value: float, bound: float) -> bool:
    return value >= bound or math.isclose(value, bound, abs_tol=_TOLERANCE)


def _build_item(key: str, planned: float, actual: float, difference: float, cfg: AdherenceConfig, ) -> RecommendationItem:
    level, type_name, area, exercise = split_key(key)
    kind = RecommendationKind.REDUCE if difference > 0 else RecommendationKind.INCREASE
    priority = Priority.HIGH if _at_least(abs(difference), cfg.high_priority_threshold) else Priority.MEDIUM

    item = RecommendationItem(level=level, category=type_name,
                              subcategory=type_name if level is PlanLevel.TYPE else area, exercise=exercise,
                              current_percentage=round(actual, 1), planned_percentage=round(planned, 1),
                              difference=round(difference, 1), priority=priority, kind=kind, )
    item._gap = difference
    item.directive = format_directive(item)
    return item


def find_deviations(planned: Mapping[str, float], actual: Mapping[str, float],
                    config: Optional[AdherenceConfig] = None, ) -> list[RecommendationItem]:
    """Significant deviations, in plan key order (unranked)."""
    cfg = config or DEFAULT_CONFIG
    items: list[RecommendationItem] = []

    for key, planned_pct in planned.items():
        actual_pct = actual.get(key, 0.0)
        difference = actual_pct - planned_pct
        if not _at_least(abs(difference), cfg.significance_threshold):
            continue
        items.append(_build_item(key, planned_pct, actual_pct, difference, cfg))

    return items


def _rank_key(item: RecommendationItem) -> tuple[float, int]:
    return -round(abs(item.gap), 9), 0 if item.kind is RecommendationKind.INCREASE else 1


def rank_recommendations(items: Iterable[RecommendationItem], limit: int) -> list[RecommendationItem]:
    """Largest deviations first; deficits before excesses on ties.

    The sort is stable, so remaining ties keep plan order.
    """
    return sorted(items, key=_rank_key)[:limit]


def compare_to_plan(planned: Mapping[str, float], actual: Mapping[str, float],
                    config: Optional[AdherenceConfig] = None, ) -> list[RecommendationItem]:
    """Compare a flattened plan with actual stats.

    Args:
        planned: Output of :func:`app.adherence.plan.flatten_plan`.
        actual: Output of :func:`app.adherence.aggregation.compute_actual_stats`.
            Callers must not pass an empty map for a player without
            sessions: every planned key would read as a full deficit.
        config: Optional :class:`AdherenceConfig` override.

    Returns:
        At most ``config.max_recommendations`` ranked items.
    """
    cfg = config or DEFAULT_CONFIG
    return rank_recommendations(find_deviations(planned, actual, cfg), cfg.max_recommendations)
