"""
Persistent storage for event records.

This module manages one JSON file (by default data/events.json inside the
package, see recurcal.config) with the schema:

    {"events": [ {<EventRecord.to_dict()>}, ... ]}

The recurrence engine never touches this file. The CLI loads the list,
applies an operation from recurcal.series and saves the result.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from recurcal.config import config
from recurcal.model import EventRecord

logger = logging.getLogger(__name__)


def _resolve(path: str | Path | None) -> Path:
    # explicit path (tests, --data) wins over configuration
    return Path(path) if path is not None else config.DATA_PATH


def load_events(path: str | Path | None = None) -> list[EventRecord]:
    """
    Load all event records.

    Returns an empty list if the file does not exist or is not valid JSON.
    Single malformed entries are skipped with a warning, so one broken
    record never hides the rest.
    """
    events_path = _resolve(path)

    # First run: no store yet
    if not events_path.exists():
        return []

    try:
        data = json.loads(events_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("Could not read %s: %s", events_path, exc)
        return []

    raw = data.get("events", []) if isinstance(data, dict) else []
    if not isinstance(raw, list):
        return []

    out: list[EventRecord] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        try:
            out.append(EventRecord.from_dict(item))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed event in %s: %s", events_path, exc)
    return out


def save_events(events: Iterable[EventRecord], path: str | Path | None = None) -> None:
    """
    Write all event records, sorted by date and start time.
    Creates parent directories if needed.
    """
    events_path = _resolve(path)
    events_path.parent.mkdir(parents=True, exist_ok=True)

    ordered = sorted(events, key=lambda ev: (ev.date, ev.start_time, ev.id))
    payload = {"events": [ev.to_dict() for ev in ordered]}

    events_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.debug("Saved %d events to %s", len(ordered), events_path)
