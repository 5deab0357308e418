"""
Unit tests for the per-player pipeline and the batch orchestrator.

Uses :class:`InMemoryTrainingData` as the data source; storage failures
are simulated with a source that raises.
"""

import datetime

from app.adherence.config import AdherenceConfig
from app.adherence.deviation import compare_to_plan
from app.adherence.engine import (
    ADAPTED_PREFIX,
    ERROR_MESSAGE,
    NO_PLAN_SUMMARY,
    NOT_FOUND_MESSAGE,
    RecommendationCache,
    _compose_summary,
    compute_batch_recommendations,
    compute_player_recommendations,
)
from app.adherence.sources import DataSourceError, InMemoryTrainingData, TrainingDataSource
from app.schemas.recommendation import Priority, RecommendationKind
from app.schemas.training_plan import TrainingPlan

ACADEMY = "acad-1"
NOW = datetime.datetime(2026, 10, 19, 12, 0)


# ======================================================================
# Helpers
# ======================================================================


def _make_plan(type_percentages: dict[str, float]) -> TrainingPlan:
    return TrainingPlan.model_validate(
        {"types": {t: {"percent_of_total": p} for t, p in type_percentages.items()}}
    )


def _make_legacy(player_id: str, minutes: dict[str, float], days_ago: float = 1) -> dict:
    return {
        "player_id": player_id,
        "date": NOW - datetime.timedelta(days=days_ago),
        "exercises": [
            {"type": t, "area": "Base game", "duration": f"{m} min"} for t, m in minutes.items()
        ],
    }


def _make_group(player_ids: list[str], minutes: dict[str, float], days_ago: float = 1) -> dict:
    return {
        "date": NOW - datetime.timedelta(days=days_ago),
        "participants": [{"player_id": p} for p in player_ids],
        "exercises": [
            {"type": t, "area": "Base game", "duration": m} for t, m in minutes.items()
        ],
    }


def _make_source(plans: dict | None = None, sessions: list | None = None, window: int | None = None):
    return InMemoryTrainingData(
        plans={(ACADEMY, p): plan for p, plan in (plans or {}).items()},
        sessions={ACADEMY: sessions or []},
        window_days={ACADEMY: window} if window else None,
    )


class _FailingSource:
    """Source whose session reads fail, optionally for selected players only."""

    def __init__(self, inner: InMemoryTrainingData, failing: set[str] | None = None):
        self.inner = inner
        self.failing = failing
        self.session_reads = 0

    def get_training_plan(self, academy_id, player_id):
        return self.inner.get_training_plan(academy_id, player_id)

    def get_sessions(self, academy_id, player_id, since):
        self.session_reads += 1
        if self.failing is None or player_id in self.failing:
            raise DataSourceError("connection lost")
        return self.inner.get_sessions(academy_id, player_id, since)

    def get_analysis_window_days(self, academy_id):
        return self.inner.get_analysis_window_days(academy_id)


# ======================================================================
# Single player
# ======================================================================


class TestComputePlayerRecommendations:
    def test_tie_ranks_increase_before_reduce(self):
        source = _make_source(
            plans={"p1": _make_plan({"Rally": 80, "Baskets": 20})},
            sessions=[_make_legacy("p1", {"Rally": 90, "Baskets": 10})],
        )
        result = compute_player_recommendations(source, ACADEMY, "p1", as_of=NOW)

        assert result.error is None
        assert result.has_active_plan and result.has_sessions
        assert not result.is_new_player
        assert [(i.kind, i.category, i.priority) for i in result.recommendations] == [
            (RecommendationKind.INCREASE, "Baskets", Priority.MEDIUM),
            (RecommendationKind.REDUCE, "Rally", Priority.MEDIUM),
        ]

    def test_unplanned_activity_shows_as_deficit(self):
        source = _make_source(
            plans={"p1": _make_plan({"Rally": 100})},
            sessions=[_make_legacy("p1", {"Rally": 60, "Points": 40})],
        )
        result = compute_player_recommendations(source, ACADEMY, "p1", as_of=NOW)

        assert len(result.recommendations) == 1
        item = result.recommendations[0]
        assert item.priority is Priority.HIGH
        assert item.directive == "INCREASE Rally (deficit of 40%)"
        assert "1 area(s) needing immediate attention" in result.summary

    def test_no_plan_and_no_peer_plan(self):
        source = _make_source(sessions=[_make_legacy("p1", {"Rally": 30})])
        result = compute_player_recommendations(source, ACADEMY, "p1", as_of=NOW, roster=["p1", "p2"])

        assert result.has_active_plan is False
        assert result.recommendations == []
        assert result.summary == NO_PLAN_SUMMARY
        assert result.error is None

    def test_no_sessions_is_new_player(self):
        source = _make_source(plans={"p1": _make_plan({"Rally": 100})})
        result = compute_player_recommendations(source, ACADEMY, "p1", as_of=NOW)

        assert result.is_new_player is True
        assert result.has_active_plan is True
        assert result.has_sessions is False
        assert result.recommendations == []
        assert "last 7 days" in result.summary

    def test_sessions_outside_window_are_ignored(self):
        source = _make_source(
            plans={"p1": _make_plan({"Rally": 100})},
            sessions=[_make_legacy("p1", {"Rally": 30}, days_ago=10)],
        )
        result = compute_player_recommendations(source, ACADEMY, "p1", as_of=NOW)
        assert result.has_sessions is False

    def test_academy_window_overrides_default(self):
        source = _make_source(
            plans={"p1": _make_plan({"Rally": 100})},
            sessions=[_make_legacy("p1", {"Rally": 30}, days_ago=10)],
            window=14,
        )
        result = compute_player_recommendations(source, ACADEMY, "p1", as_of=NOW)
        assert result.has_sessions is True
        assert result.sessions_analyzed == 1

    def test_zero_recorded_minutes(self):
        source = _make_source(
            plans={"p1": _make_plan({"Rally": 100})},
            sessions=[_make_legacy("p1", {"Rally": 0})],
        )
        result = compute_player_recommendations(source, ACADEMY, "p1", as_of=NOW)

        assert result.has_sessions is True
        assert result.recommendations == []
        assert "no recorded training time" in result.summary

    def test_balanced_training(self):
        source = _make_source(
            plans={"p1": _make_plan({"Rally": 50, "Baskets": 50})},
            sessions=[
                _make_legacy("p1", {"Rally": 30, "Baskets": 25}, days_ago=1),
                _make_legacy("p1", {"Rally": 20, "Baskets": 25}, days_ago=2),
            ],
        )
        result = compute_player_recommendations(source, ACADEMY, "p1", as_of=NOW)

        assert result.recommendations == []
        assert result.sessions_analyzed == 2
        assert "well balanced" in result.summary
        assert "(based on 2 recent sessions)" in result.summary

    def test_group_sessions_count_for_participants(self):
        source = _make_source(
            plans={"p2": _make_plan({"Rally": 100})},
            sessions=[_make_group(["p1", "p2"], {"Baskets": 60})],
        )
        result = compute_player_recommendations(source, ACADEMY, "p2", as_of=NOW)
        assert result.recommendations[0].directive == "INCREASE Rally (deficit of 100%)"

    def test_aware_as_of_is_accepted(self):
        source = _make_source(
            plans={"p1": _make_plan({"Rally": 100})},
            sessions=[_make_legacy("p1", {"Rally": 30})],
        )
        as_of = NOW.replace(tzinfo=datetime.timezone.utc)
        result = compute_player_recommendations(source, ACADEMY, "p1", as_of=as_of)
        assert result.error is None
        assert result.has_sessions is True

    def test_unusual_intensity_still_counts(self):
        session = _make_legacy("p1", {"Baskets": 60})
        session["exercises"][0]["intensity"] = 11
        source = _make_source(plans={"p1": _make_plan({"Rally": 100})}, sessions=[session])
        result = compute_player_recommendations(source, ACADEMY, "p1", as_of=NOW)

        assert result.sessions_analyzed == 1
        assert result.recommendations[0].directive == "INCREASE Rally (deficit of 100%)"

    def test_max_sessions(self):
        source = _make_source(
            plans={"p1": _make_plan({"Rally": 100})},
            sessions=[
                _make_legacy("p1", {"Rally": 30}, days_ago=1),
                _make_legacy("p1", {"Baskets": 30}, days_ago=2),
            ],
        )
        result = compute_player_recommendations(
            source, ACADEMY, "p1", as_of=NOW, config=AdherenceConfig(max_sessions=1)
        )
        assert result.sessions_analyzed == 1
        assert result.recommendations == []


# ======================================================================
# Plan adaptation and roster
# ======================================================================


class TestPlanAdaptation:
    def test_first_roster_plan_is_adapted(self):
        source = _make_source(
            plans={"p2": _make_plan({"Rally": 100}), "p3": _make_plan({"Baskets": 100})},
            sessions=[_make_legacy("p1", {"Baskets": 60})],
        )
        result = compute_player_recommendations(
            source, ACADEMY, "p1", as_of=NOW, roster=["p1", "p2", "p3"]
        )

        assert result.plan_adapted is True
        assert result.has_active_plan is True
        assert result.summary.startswith(ADAPTED_PREFIX)
        assert result.recommendations[0].category == "Rally"

    def test_own_plan_preferred(self):
        source = _make_source(
            plans={"p1": _make_plan({"Baskets": 100}), "p2": _make_plan({"Rally": 100})},
            sessions=[_make_legacy("p1", {"Baskets": 60})],
        )
        result = compute_player_recommendations(source, ACADEMY, "p1", as_of=NOW, roster=["p2", "p1"])

        assert result.plan_adapted is False
        assert result.recommendations == []

    def test_player_missing_from_roster(self):
        source = _make_source(plans={"p1": _make_plan({"Rally": 100})})
        result = compute_player_recommendations(source, ACADEMY, "ghost", as_of=NOW, roster=["p1"])

        assert result.error == NOT_FOUND_MESSAGE
        assert result.summary == NOT_FOUND_MESSAGE
        assert result.is_new_player is True


# ======================================================================
# Failures
# ======================================================================


class TestFailures:
    def test_storage_failure_becomes_error_result(self):
        source = _FailingSource(_make_source(plans={"p1": _make_plan({"Rally": 100})}))
        result = compute_player_recommendations(source, ACADEMY, "p1", as_of=NOW)

        assert result.error == ERROR_MESSAGE
        assert result.recommendations == []
        assert result.has_active_plan is False

    def test_failure_is_logged(self, caplog):
        source = _FailingSource(_make_source())
        with caplog.at_level("ERROR", logger="app"):
            compute_player_recommendations(source, ACADEMY, "p1", as_of=NOW)
        assert any(r.exc_info for r in caplog.records)

    def test_failing_source_is_a_data_source(self):
        assert isinstance(_FailingSource(_make_source()), TrainingDataSource)


# ======================================================================
# Batch and cache
# ======================================================================


class TestComputeBatchRecommendations:
    def test_one_result_per_player_despite_failures(self):
        inner = _make_source(
            plans={"p1": _make_plan({"Rally": 100}), "p2": _make_plan({"Rally": 100})},
            sessions=[_make_legacy("p1", {"Rally": 30}), _make_legacy("p2", {"Baskets": 30})],
        )
        source = _FailingSource(inner, failing={"p2"})
        results = compute_batch_recommendations(source, ACADEMY, ["p1", "p2", "p3"], as_of=NOW)

        assert list(results) == ["p1", "p2", "p3"]
        assert results["p1"].error is None
        assert results["p2"].error == ERROR_MESSAGE
        assert results["p3"].error is None
        assert results["p3"].plan_adapted is True

    def test_batch_is_the_roster(self):
        source = _make_source(
            plans={"p2": _make_plan({"Rally": 100})},
            sessions=[_make_legacy("p1", {"Rally": 30})],
        )
        results = compute_batch_recommendations(source, ACADEMY, ["p1", "p2"], as_of=NOW)
        assert results["p1"].plan_adapted is True

    def test_cache_reused_until_cleared(self):
        source = _FailingSource(
            _make_source(plans={"p1": _make_plan({"Rally": 100})}, sessions=[_make_legacy("p1", {"Rally": 30})]),
            failing=set(),
        )
        cache = RecommendationCache()

        first = compute_batch_recommendations(source, ACADEMY, ["p1"], as_of=NOW, cache=cache)
        second = compute_batch_recommendations(source, ACADEMY, ["p1"], as_of=NOW, cache=cache)
        assert source.session_reads == 1
        assert second["p1"] is first["p1"]
        assert "p1" in cache and len(cache) == 1

        cache.clear()
        compute_batch_recommendations(source, ACADEMY, ["p1"], as_of=NOW, cache=cache)
        assert source.session_reads == 2

    def test_error_results_are_cached(self):
        source = _FailingSource(_make_source())
        cache = RecommendationCache()
        compute_batch_recommendations(source, ACADEMY, ["p1"], as_of=NOW, cache=cache)
        compute_batch_recommendations(source, ACADEMY, ["p1"], as_of=NOW, cache=cache)
        assert source.session_reads == 1
        assert cache.get("p1").error == ERROR_MESSAGE

    def test_without_cache_recomputes(self):
        source = _FailingSource(_make_source(), failing=set())
        compute_batch_recommendations(source, ACADEMY, ["p1"], as_of=NOW)
        compute_batch_recommendations(source, ACADEMY, ["p1"], as_of=NOW)
        assert source.session_reads == 2


# ======================================================================
# Summary
# ======================================================================


class TestComposeSummary:
    def _items(self, planned: dict, actual: dict):
        return compare_to_plan(planned, actual)

    def test_medium_only(self):
        items = self._items({"type.A": 50.0}, {"type.A": 62.0})
        summary = _compose_summary(items, adapted=False, sessions_analyzed=1)
        assert summary == (
            "The plan is mostly balanced. 1 minor adjustment(s) suggested "
            "(based on 1 recent session)."
        )

    def test_high_and_medium(self):
        items = self._items({"type.A": 50.0, "type.B": 30.0}, {"type.A": 90.0, "type.B": 15.0})
        summary = _compose_summary(items, adapted=True, sessions_analyzed=3)
        assert summary == (
            f"{ADAPTED_PREFIX}Recent sessions show 1 area(s) needing immediate attention "
            "and 1 area(s) to adjust gradually (based on 3 recent sessions)."
        )

    def test_no_note_without_sessions(self):
        assert _compose_summary([], False, 0).endswith("plan. Keep it up!")
