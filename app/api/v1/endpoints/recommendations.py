"""
Recommendation endpoints: plan adherence per player and per group.
"""

import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.adherence.engine import (
    RecommendationCache,
    compute_batch_recommendations,
    compute_player_recommendations,
)
from app.adherence.group import compute_group_recommendations
from app.adherence.sources import TrainingDataSource
from app.api.dependencies import get_recommendation_cache, get_training_data
from app.schemas.recommendation import (
    BatchRecommendationRequest,
    BatchRecommendations,
    PlayerRecommendations,
)

router = APIRouter()


@router.get(
    "/{academy_id}/players/{player_id}/recommendations",
    summary="Get plan-adherence recommendations for one player.",
    response_model=PlayerRecommendations,
)
def get_player_recommendations(
    academy_id: str,
    player_id: str,
    as_of: Optional[datetime.datetime] = Query(
        None, description="End of the analysis window (defaults to now)"
    ),
    roster: Optional[list[str]] = Query(
        None, description="Players whose plans may be adapted when the player has none"
    ),
    source: TrainingDataSource = Depends(get_training_data),
):
    return compute_player_recommendations(source, academy_id, player_id, as_of=as_of, roster=roster)


@router.post(
    "/{academy_id}/recommendations",
    summary="Get recommendations for a group of players and the deviations they share.",
    response_model=BatchRecommendations,
)
def get_group_recommendations(
    academy_id: str,
    body: BatchRecommendationRequest,
    as_of: Optional[datetime.datetime] = Query(
        None, description="End of the analysis window (defaults to now)"
    ),
    source: TrainingDataSource = Depends(get_training_data),
    cache: RecommendationCache = Depends(get_recommendation_cache),
):
    results = compute_batch_recommendations(source, academy_id, body.player_ids, as_of=as_of, cache=cache)
    return BatchRecommendations(players=results, group=compute_group_recommendations(results))


@router.delete(
    "/{academy_id}/recommendations/cache",
    summary="Discard cached recommendations of an academy.",
    status_code=status.HTTP_204_NO_CONTENT,
)
def clear_recommendations_cache(
    cache: RecommendationCache = Depends(get_recommendation_cache),
):
    cache.clear()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
