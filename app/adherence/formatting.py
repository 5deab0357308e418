"""Human-readable directives for recommendation items."""

from __future__ import annotations

import math
from typing import Union

from app.schemas.recommendation import GroupRecommendation, RecommendationItem, RecommendationKind


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _side(kind: RecommendationKind) -> str:
    return "excess" if kind is RecommendationKind.REDUCE else "deficit"


def category_path(item: Union[RecommendationItem, GroupRecommendation]) -> str:
    path = item.subcategory
    if item.exercise:
        path += f" - {item.exercise}"
    if item.specific_exercise:
        path += f" ({item.specific_exercise})"
    return path


def format_directive(item: RecommendationItem) -> str:
    """``"INCREASE Rally (deficit of 40%)"`` / ``"REDUCE ... (excess of 12%)"``."""
    return f"{item.kind.value} {category_path(item)} ({_side(item.kind)} of {_round_half_up(abs(item.gap))}%)"


def format_group_directive(entry: GroupRecommendation, average: float) -> str:
    """``"INCREASE Rally (3 players, average deficit of 20%)"``."""
    return (f"{entry.kind.value} {category_path(entry)} "
            f"({entry.player_count} players, average {_side(entry.kind)} of {_round_half_up(abs(average))}%)")
