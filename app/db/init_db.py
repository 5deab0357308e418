"""
Database initialization.

Creates all tables known to SQLModel.  Production schemas are managed by
Alembic; this is meant for local development.
"""

from sqlmodel import SQLModel

from app.core.logging import get_logger
from app.db.session import engine

logger = get_logger(__name__)


def init_db() -> None:
    """Create the training plan, training session and academy settings tables."""

    # Import all models so SQLModel.metadata has them
    import app.db.base  # noqa: F401

    logger.info("Creating database tables")
    SQLModel.metadata.create_all(engine)
    logger.info("Database initialization complete")


if __name__ == "__main__":
    init_db()
