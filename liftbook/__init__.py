"""Shared constants for the liftbook core modules."""

from __future__ import annotations

import os
from pathlib import Path

# Day-types offered by the plan catalog
DAY1 = "Day1"
DAY2 = "Day2"
DAY_TYPES = (DAY1, DAY2)

# Keys used in the key/value store
SESSIONS_KEY = "sessions"
SETTINGS_KEY = "settings"
PLAN_OVERRIDE_KEY = "plan-override"

# Values used when no settings have been stored yet
DEFAULT_BODY_WEIGHT = 150
DEFAULT_WEEK_STARTS_WITH_DAY1 = True

# Seconds between ticks of the workout timer
TIMER_INTERVAL = 1

# Location of the local SQLite store; ``LIFTBOOK_DB_PATH`` overrides it
DEFAULT_DB_PATH = Path(
    os.environ.get(
        "LIFTBOOK_DB_PATH",
        Path(__file__).resolve().parent.parent / "data" / "liftbook.db",
    )
)

# Directory receiving JSON exports
DEFAULT_EXPORT_DIR = Path(__file__).resolve().parent.parent / "exports"

__all__ = [
    "DAY1",
    "DAY2",
    "DAY_TYPES",
    "SESSIONS_KEY",
    "SETTINGS_KEY",
    "PLAN_OVERRIDE_KEY",
    "DEFAULT_BODY_WEIGHT",
    "DEFAULT_WEEK_STARTS_WITH_DAY1",
    "TIMER_INTERVAL",
    "DEFAULT_DB_PATH",
    "DEFAULT_EXPORT_DIR",
]
