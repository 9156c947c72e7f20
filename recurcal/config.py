"""
Runtime configuration from environment variables (and an optional .env file).

    RECURCAL_DATA       path of the JSON event store
                        (default: <package>/data/events.json)
    RECURCAL_LOG_LEVEL  logging level name for the CLI (default and fallback: WARNING)

The CLI --data flag takes precedence over RECURCAL_DATA.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PACKAGE_DIR = Path(__file__).resolve().parent


def _default_events_path() -> Path:
    return PACKAGE_DIR / "data" / "events.json"


def _log_level(name: str | None) -> str:
    """
    Normalize a level name; unknown names fall back to WARNING.
    """
    level = (name or "WARNING").strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        return "WARNING"
    return level


class Config:
    """Application configuration, read once at import time."""

    DATA_PATH: Path = Path(os.getenv("RECURCAL_DATA") or _default_events_path())
    LOG_LEVEL: str = _log_level(os.getenv("RECURCAL_LOG_LEVEL"))


config = Config()
