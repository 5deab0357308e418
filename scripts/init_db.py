"""
Database initialization script.

Creates the training data tables and, with ``--seed``, stores a demo plan
and a week of demo sessions for academy ``demo``.

Usage:
    python scripts/init_db.py [--seed]
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from sqlmodel import Session

from app.db.init_db import init_db
from app.db.repositories.training_data import TrainingDataRepository
from app.db.session import engine
from scripts.simulate_recommendations import ACADEMY_ID, DEMO_PLAN, demo_sessions


def seed() -> None:
    with Session(engine) as session:
        repo = TrainingDataRepository(session)
        repo.save_plan(ACADEMY_ID, "ana", DEMO_PLAN)
        for raw in demo_sessions():
            repo.add_session(ACADEMY_ID, raw)
        repo.set_analysis_window_days(ACADEMY_ID, 7)


if __name__ == "__main__":
    print("=" * 50)
    print("CourtPlan Database Initialization")
    print("=" * 50)
    print()

    try:
        init_db()
        if "--seed" in sys.argv:
            seed()
            print(f"Seeded demo data for academy '{ACADEMY_ID}'")
        print()
        print("=" * 50)
        print("SUCCESS: Database initialized!")
        print("=" * 50)
        sys.exit(0)

    except Exception as e:
        print()
        print("=" * 50)
        print("ERROR: Database initialization failed!")
        print(f"Details: {e}")
        print("=" * 50)
        sys.exit(1)
