"""
Per-player recommendation pipeline.

Architecture:
    1. **Plan**: the player's own plan, or the first plan found among the
       other roster players (an *adapted* plan).
    2. **Sessions**: the player's sessions inside the analysis window.
    3. **Comparison**: flatten plan, aggregate minutes, rank deviations,
       format directives, compose a summary.

Every invocation ends in exactly one :class:`PlayerRecommendations`.  A
missing plan or an empty history produce informative terminal results;
any failure while reading from the data source produces an error result.
Nothing is raised to the caller, so a batch always completes for every
player.
"""

from __future__ import annotations

import datetime
from typing import Iterable, Optional, Sequence

from app.adherence.aggregation import AnalysisWindow, aggregate_sessions
from app.adherence.config import DEFAULT_CONFIG, AdherenceConfig
from app.adherence.deviation import compare_to_plan
from app.adherence.plan import flatten_plan
from app.adherence.sources import TrainingDataSource
from app.core.logging import get_logger
from app.schemas.recommendation import (
    PlayerRecommendations,
    Priority,
    RecommendationItem,
)
from app.schemas.training_plan import TrainingPlan

logger = get_logger(__name__)

NO_PLAN_SUMMARY = "The player has no training plan defined. Create one before generating recommendations."
NOT_FOUND_MESSAGE = "Player not found"
ERROR_SUMMARY = "Could not generate recommendations."
ERROR_MESSAGE = "Could not analyse the training history"
ADAPTED_PREFIX = "[Adapted plan] "


# ======================================================================
# Result cache (owned by the caller)
# ======================================================================


class RecommendationCache:
    """Per-player results kept until :meth:`clear` is called."""

    def __init__(self) -> None:
        self._results: dict[str, PlayerRecommendations] = {}

    def get(self, player_id: str) -> Optional[PlayerRecommendations]:
        return self._results.get(player_id)

    def put(self, player_id: str, result: PlayerRecommendations) -> None:
        self._results[player_id] = result

    def clear(self) -> None:
        self._results.clear()

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._results

    def __len__(self) -> int:
        return len(self._results)


# ======================================================================
# Plan resolution
# ======================================================================


def _resolve_plan(source: TrainingDataSource, academy_id: str, player_id: str,
                  roster: Sequence[str], ) -> tuple[Optional[TrainingPlan], bool]:
    """Return ``(plan, adapted)``.

    Falls back to the first roster player, in roster order, who has a plan.
    """
    plan = source.get_training_plan(academy_id, player_id)
    if plan is not None:
        return plan, False

    for other_id in roster:
        if other_id == player_id:
            continue
        other_plan = source.get_training_plan(academy_id, other_id)
        if other_plan is not None:
            logger.info("Adapting plan of %s for %s", other_id, player_id,
                        extra={"ctx_player_id": player_id, "ctx_plan_owner": other_id}, )
            return other_plan, True

    return None, False


# ======================================================================
# Summary
# ======================================================================


def _sessions_note(sessions_analyzed: int) -> str:
    if sessions_analyzed <= 0:
        return ""
    plural = "s" if sessions_analyzed > 1 else ""
    return f" (based on {sessions_analyzed} recent session{plural})"


def _compose_summary(items: list[RecommendationItem], adapted: bool, sessions_analyzed: int, ) -> str:
    """One-sentence summary of the ranked recommendations."""
    prefix = ADAPTED_PREFIX if adapted else ""
    note = _sessions_note(sessions_analyzed)

    if not items:
        return f"{prefix}Training is well balanced against the plan{note}. Keep it up!"

    high = sum(1 for i in items if i.priority is Priority.HIGH)
    medium = sum(1 for i in items if i.priority is Priority.MEDIUM)

    if high > 0:
        return (f"{prefix}Recent sessions show {high} area(s) needing immediate attention "
                f"and {medium} area(s) to adjust gradually{note}.")
    return f"{prefix}The plan is mostly balanced. {medium} minor adjustment(s) suggested{note}."


def _no_history_summary(window_days: int) -> str:
    return (f"New player: no training sessions in the last {window_days} days. "
            "Log sessions to get plan-based recommendations.")


# ======================================================================
# Entry points
# ======================================================================


def _utc_naive(value: Optional[datetime.datetime]) -> datetime.datetime:
    if value is None:
        return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)
    if value.tzinfo is not None:
        return value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    return value


def compute_player_recommendations(source: TrainingDataSource, academy_id: str, player_id: str,
                                   as_of: Optional[datetime.datetime] = None,
                                   roster: Optional[Sequence[str]] = None,
                                   config: Optional[AdherenceConfig] = None, ) -> PlayerRecommendations:
    """Compute plan-adherence recommendations for one player.

    Args:
        source: Plan and session reader.
        academy_id: Academy the player belongs to.
        player_id: Player to analyse.
        as_of: End of the analysis window (defaults to now, UTC).
        roster: Players analysed together; used for plan adaptation.  When
            given, *player_id* must be part of it.
        config: Optional :class:`AdherenceConfig` override.

    Returns:
        :class:`PlayerRecommendations`; never raises.
    """
    cfg = config or DEFAULT_CONFIG
    roster = list(roster or [])
    log_ctx = {"ctx_academy_id": academy_id, "ctx_player_id": player_id}

    if roster and player_id not in roster:
        logger.warning("Player %s is not in the roster", player_id, extra=log_ctx)
        return PlayerRecommendations(is_new_player=True, summary=NOT_FOUND_MESSAGE, error=NOT_FOUND_MESSAGE)

    try:
        plan, adapted = _resolve_plan(source, academy_id, player_id, roster)
        window_days = source.get_analysis_window_days(academy_id) or cfg.analysis_window_days
        window = AnalysisWindow.ending_at(_utc_naive(as_of), window_days)
        sessions = source.get_sessions(academy_id, player_id, window.start)

        aggregate = aggregate_sessions(sessions, player_id, window, cfg.max_sessions)
        has_plan = plan is not None
        has_sessions = aggregate.session_count > 0
        logger.debug("Aggregated %d session(s), %.1f minute(s)", aggregate.session_count, aggregate.total_minutes,
                     extra=log_ctx, )

        if plan is None or not has_sessions or aggregate.total_minutes <= 0:
            if not has_plan:
                summary = NO_PLAN_SUMMARY
            elif not has_sessions:
                summary = _no_history_summary(window_days)
            else:
                summary = "Recent sessions have no recorded training time to compare against the plan."
            return PlayerRecommendations(is_new_player=not has_sessions, has_active_plan=has_plan,
                                         has_sessions=has_sessions, plan_adapted=adapted,
                                         sessions_analyzed=aggregate.session_count, summary=summary, )

        planned = flatten_plan(plan)
        items = compare_to_plan(planned, aggregate.percentages, cfg)
        logger.debug("Compared %d planned key(s), %d recommendation(s)", len(planned), len(items), extra=log_ctx)

        return PlayerRecommendations(is_new_player=False, has_active_plan=True, has_sessions=True,
                                     plan_adapted=adapted, sessions_analyzed=aggregate.session_count,
                                     recommendations=items,
                                     summary=_compose_summary(items, adapted, aggregate.session_count), )

    except Exception:
        logger.exception("Recommendation analysis failed", extra=log_ctx)
        return PlayerRecommendations(summary=ERROR_SUMMARY, error=ERROR_MESSAGE)


def compute_batch_recommendations(source: TrainingDataSource, academy_id: str, player_ids: Iterable[str],
                                  as_of: Optional[datetime.datetime] = None,
                                  config: Optional[AdherenceConfig] = None,
                                  cache: Optional[RecommendationCache] = None, ) -> dict[str, PlayerRecommendations]:
    """Compute recommendations for several players.

    Players are processed independently; the batch itself is the roster
    used for plan adaptation.  Players already in *cache* are returned
    from it, new results are stored in it.
    """
    roster = list(player_ids)
    results: dict[str, PlayerRecommendations] = {}

    for player_id in roster:
        cached = cache.get(player_id) if cache is not None else None
        if cached is not None:
            results[player_id] = cached
            continue

        result = compute_player_recommendations(source, academy_id, player_id, as_of=as_of, roster=roster,
                                                config=config, )
        if cache is not None:
            cache.put(player_id, result)
        results[player_id] = result

    return results
