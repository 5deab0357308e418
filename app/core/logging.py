"""
Logging setup.

Every module logs through :func:`get_logger`.  The ``app`` logger carries a
``NullHandler`` so the engine stays silent until the host application (or
``settings.LOG_ENABLED``) calls :func:`configure_logging`.

Structured context is passed with ``extra={"ctx_<name>": value}``; the JSON
formatter collects those keys under ``"context"``.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

ROOT_LOGGER_NAME = "app"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


class JSONFormatter(logging.Formatter):
    """One JSON object per record: time, level, logger, message, context.

    ``context`` holds the ``ctx_*`` extras without their prefix; a logged
    exception adds ``error`` with its type and text.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = {key[4:]: value for key, value in vars(record).items() if key.startswith("ctx_")}
        if context:
            entry["context"] = context
        if record.exc_info and record.exc_info[1] is not None:
            error = record.exc_info[1]
            entry["error"] = {"type": type(error).__name__, "message": str(error)}
        return json.dumps(entry, default=str)


def configure_logging(level: str = "INFO") -> None:
    """Attach a JSON stdout handler to the ``app`` logger.

    Idempotent: calling it again only updates the level.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if any(getattr(h, "_courtplan_handler", False) for h in logger.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler._courtplan_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)

    # Reduce noise from third-party libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("alembic").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger for a module."""
    return logging.getLogger(name)
