"""Simulate plan-adherence recommendations for a small demo academy."""

import datetime
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from app.adherence.engine import compute_batch_recommendations
from app.adherence.group import compute_group_recommendations
from app.adherence.sources import InMemoryTrainingData
from app.schemas.training_plan import AreaAllocation, TrainingPlan, TypeAllocation

ACADEMY_ID = "demo"
TODAY = datetime.datetime(2026, 10, 19, 18, 0)

# ─── Coach plan: 60% rally, 40% baskets ─────────────────────────────
DEMO_PLAN = TrainingPlan(
    types={
        "Rally": TypeAllocation(
            percent_of_total=60,
            areas={
                "Base game": AreaAllocation(
                    percent_of_total=40,
                    exercises={"Cross-court": 20},
                ),
                "Net game": AreaAllocation(percent_of_total=20),
            },
        ),
        "Baskets": TypeAllocation(
            percent_of_total=40,
            areas={"First balls": AreaAllocation(percent_of_total=40)},
        ),
    }
)

# ─── Logged week (date, type, area, exercise, duration) ─────────────
RAW_DATA = [
    ("2026-10-13", "Live ball", "Baseline work", "Cross-court", "45 min"),
    ("2026-10-13", "Baskets", "First balls", "Serve + 1", "15 min"),
    ("2026-10-15", "Rally", "Base game", "Down the line", "1 hour"),
    ("2026-10-15", "Rally", "Net game", "Volleys", "20"),
    ("2026-10-17", "Live ball", "Baseline", "Cross-court", "1.5h"),
    ("2026-10-18", "Baskets", "First balls", "Return + 1", "900 seconds"),
]


def demo_sessions() -> list[dict]:
    """Group the raw rows into one legacy session per day for ``ana``."""
    by_day: dict[str, list[dict]] = {}
    for date, type_name, area, exercise, duration in RAW_DATA:
        by_day.setdefault(date, []).append(
            {"type": type_name, "area": area, "exercise": exercise, "duration": duration}
        )
    sessions = [
        {"player_id": "ana", "date": f"{date}T10:00:00", "exercises": exercises}
        for date, exercises in by_day.items()
    ]
    # Shared session for the squad, logged in the group shape
    sessions.append(
        {
            "date": "2026-10-16T09:00:00",
            "participants": [
                {"player_id": "ana", "player_name": "Ana"},
                {"player_id": "bruno", "player_name": "Bruno"},
            ],
            "exercises": [
                {"type": "Rally", "area": "Points", "exercise": "Tiebreaks", "duration": "30 min"},
            ],
        }
    )
    return sessions


def main() -> None:
    source = InMemoryTrainingData(
        plans={(ACADEMY_ID, "ana"): DEMO_PLAN},
        sessions={ACADEMY_ID: demo_sessions()},
        window_days={ACADEMY_ID: 7},
    )

    results = compute_batch_recommendations(
        source, ACADEMY_ID, ["ana", "bruno", "carla"], as_of=TODAY
    )

    print("=" * 65)
    print(f"  CourtPlan recommendations as of {TODAY:%Y-%m-%d %H:%M}")
    print("=" * 65)
    for player_id, result in results.items():
        print()
        print(f"  {player_id}")
        print("  " + "-" * 63)
        print(f"  {result.summary}")
        if result.error:
            print(f"  error: {result.error}")
        for item in result.recommendations:
            print(f"    [{item.priority.value:<6}] {item.directive}")

    group = compute_group_recommendations(results)
    print()
    print("  Group")
    print("  " + "-" * 63)
    if not group:
        print("  No deviation shared by several players.")
    for entry in group:
        print(f"    {entry.directive}")


if __name__ == "__main__":
    main()
