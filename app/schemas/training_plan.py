"""
Training plan schemas.

A plan is a three-level percentage tree authored by a coach:

    Type  ->  Area  ->  Exercise

Every stored percentage is a share of the **whole** plan, not of its
parent.  Levels may be partially specified; nothing here enforces that a
level sums to 100.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field, computed_field


class AreaAllocation(BaseModel):
    """Planned share of one area, with optional per-exercise shares."""

    percent_of_total: Optional[float] = Field(None, ge=0.0, le=100.0)
    exercises: dict[str, float] = Field(
        default_factory=dict,
        description="Exercise name -> percent of the whole plan",
    )


class TypeAllocation(BaseModel):
    """Planned share of one training type (e.g. Rally, Baskets)."""

    percent_of_total: Optional[float] = Field(None, ge=0.0, le=100.0)
    areas: dict[str, AreaAllocation] = Field(default_factory=dict)


class TrainingPlan(BaseModel):
    """A player's training plan."""

    player_id: Optional[str] = None
    types: dict[str, TypeAllocation] = Field(default_factory=dict)
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def uses_flexible_distribution(self) -> bool:
        """``True`` when a type's share is not fully broken down into areas.

        Informational only; the comparison never reads it.
        """
        for allocation in self.types.values():
            type_pct = allocation.percent_of_total or 0.0
            if type_pct <= 0:
                continue
            if not allocation.areas:
                return True
            areas_pct = sum(a.percent_of_total or 0.0 for a in allocation.areas.values())
            if areas_pct < type_pct:
                return True
        return False
