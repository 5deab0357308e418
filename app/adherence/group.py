"""
Group recommendations.

After a batch, deviations that several players share are reported once for
the whole group.  Two items match when they point at the same plan key in
the same direction.  Only the ranked per-player items are considered, so a
deviation cut by ``max_recommendations`` does not count for that player.
"""

from __future__ import annotations

from typing import Mapping, Optional

from app.adherence.config import DEFAULT_CONFIG, AdherenceConfig
from app.adherence.formatting import format_group_directive
from app.schemas.recommendation import (
    GroupRecommendation,
    PlanLevel,
    PlayerRecommendations,
    RecommendationItem,
    RecommendationKind,
)

_GroupKey = tuple[PlanLevel, str, str, Optional[str], Optional[str], RecommendationKind]


def _group_key(item: RecommendationItem) -> _GroupKey:
    return item.level, item.category, item.subcategory, item.exercise, item.specific_exercise, item.kind


def compute_group_recommendations(results: Mapping[str, PlayerRecommendations],
                                  config: Optional[AdherenceConfig] = None, ) -> list[GroupRecommendation]:
    """Deviations shared by at least ``config.min_group_players`` players.

    Most shared first; equal counts keep the order in which the deviation
    was first seen (player order, then rank within the player).
    """
    cfg = config or DEFAULT_CONFIG
    shared: dict[_GroupKey, list[tuple[str, RecommendationItem]]] = {}

    for player_id, result in results.items():
        for item in result.recommendations:
            shared.setdefault(_group_key(item), []).append((player_id, item))

    group: list[GroupRecommendation] = []
    for (level, category, subcategory, exercise, specific, kind), members in shared.items():
        if len(members) < cfg.min_group_players:
            continue
        average = sum(item.gap for _, item in members) / len(members)
        entry = GroupRecommendation(level=level, category=category, subcategory=subcategory, exercise=exercise,
                                    specific_exercise=specific, kind=kind, player_count=len(members),
                                    player_ids=[player_id for player_id, _ in members],
                                    average_difference=round(average, 1), )
        entry.directive = format_group_directive(entry, average)
        group.append(entry)

    group.sort(key=lambda g: -g.player_count)
    return group
