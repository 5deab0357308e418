"""
Plan flattening.

Turns the three-level plan tree into a flat ``{key: percent}`` map using
the same key scheme as the session aggregation::

    type.<Type>
    type.<Type>.area.<Area>
    type.<Type>.area.<Area>.exercise.<Exercise>

Stored percentages are already shares of the whole plan and are copied
as-is.  They are never multiplied through the hierarchy.
"""

from __future__ import annotations

from typing import Optional

from app.adherence.normalization import normalize_label
from app.schemas.recommendation import PlanLevel
from app.schemas.training_plan import TrainingPlan


def hierarchical_key(type_name: str, area: Optional[str] = None, exercise: Optional[str] = None, ) -> str:
    """Build the flat key for a plan or session node.

    Type and area labels are normalised here so both sides of the
    comparison share one spelling.
    """
    key = f"type.{normalize_label(type_name)}"
    if area is None:
        return key
    key += f".area.{normalize_label(area)}"
    if exercise is None:
        return key
    return f"{key}.exercise.{exercise}"


def split_key(key: str) -> tuple[PlanLevel, str, Optional[str], Optional[str]]:
    """Inverse of :func:`hierarchical_key`.

    Returns ``(level, type, area, exercise)``.
    """
    rest = key[len("type."):]
    type_name, _, rest = rest.partition(".area.")
    if not rest:
        return PlanLevel.TYPE, type_name, None, None
    area, _, exercise = rest.partition(".exercise.")
    if not exercise:
        return PlanLevel.AREA, type_name, area, None
    return PlanLevel.EXERCISE, type_name, area, exercise


def _add(flat: dict[str, float], key: str, value: Optional[float]) -> None:
    if value is None:
        return
    # Synonym labels fold onto one key; their shares add up.
    flat[key] = flat.get(key, 0.0) + float(value)


def flatten_plan(plan: TrainingPlan) -> dict[str, float]:
    """Flatten *plan* into ``{hierarchical key: percent of total}``.

    Levels without a stored percentage are left out (no zero-fill); their
    children are still flattened.  No sum-to-100 validation is done.
    """
    flat: dict[str, float] = {}

    for type_name, type_alloc in plan.types.items():
        _add(flat, hierarchical_key(type_name), type_alloc.percent_of_total)

        for area, area_alloc in type_alloc.areas.items():
            _add(flat, hierarchical_key(type_name, area), area_alloc.percent_of_total)

            for exercise, pct in area_alloc.exercises.items():
                _add(flat, hierarchical_key(type_name, area, exercise), pct)

    return flat
