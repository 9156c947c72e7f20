"""
Single vs. whole-series operations on a flat list of event records.

Records of one series are linked only by repeat.series_id. These helpers
never mutate their input; each returns a new list.

Semantics:
- update_event / delete_event act on one record (by id). Updating detaches
  the record from its series: repeat.type becomes 'none' and the series id
  is cleared. Siblings keep their series.
- update_series / delete_series act on every record sharing a series id.
  Other series are left untouched.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import replace
from typing import Any, Iterable

from recurcal.errors import EventNotFoundError, SeriesNotFoundError
from recurcal.model import EventRecord

logger = logging.getLogger(__name__)

SERIES_FIELDS = frozenset(
    {"title", "start_time", "end_time", "description", "location", "category", "notification_time"}
)
# a single (detached) event may also move to another day
EVENT_FIELDS = SERIES_FIELDS | {"date"}


def _check_fields(changes: dict[str, Any], allowed: frozenset[str]) -> None:
    unknown = sorted(set(changes) - allowed)
    if unknown:
        raise ValueError(f"Field(s) cannot be changed here: {', '.join(unknown)}")


def _check_times(ev: EventRecord) -> None:
    # HH:MM strings are zero-padded, so they order like times
    if ev.end_time <= ev.start_time:
        raise ValueError(f"End time must be after start time: {ev.start_time}-{ev.end_time}")


def series_index(events: Iterable[EventRecord]) -> dict[str, list[str]]:
    """
    Map series_id -> ids of its member records (in list order).
    Non-recurring events are not included.
    """
    index: dict[str, list[str]] = defaultdict(list)
    for ev in events:
        if ev.series_id:
            index[ev.series_id].append(ev.id)
    return dict(index)


def series_members(events: Iterable[EventRecord], series_id: str) -> list[EventRecord]:
    return [ev for ev in events if ev.series_id == series_id]


def find_event(events: Iterable[EventRecord], event_id: str) -> EventRecord:
    for ev in events:
        if ev.id == event_id:
            return ev
    raise EventNotFoundError(event_id)


def update_event(events: list[EventRecord], event_id: str, changes: dict[str, Any]) -> list[EventRecord]:
    """
    Apply changes to one record and detach it from its series.
    """
    _check_fields(changes, EVENT_FIELDS)
    target = find_event(events, event_id)

    detached_rule = replace(target.repeat, type="none", end_date=None, series_id=None)
    updated = replace(target, repeat=detached_rule, **changes)
    if "start_time" in changes or "end_time" in changes:
        _check_times(updated)

    if target.series_id:
        logger.info("Detached event %s from series %s", event_id, target.series_id)
    return [updated if ev.id == event_id else ev for ev in events]


def update_series(events: list[EventRecord], series_id: str, changes: dict[str, Any]) -> list[EventRecord]:
    """
    Apply changes to every record of a series. Dates, ids and the repeat
    rule (including the series id) stay as they are.
    """
    _check_fields(changes, SERIES_FIELDS)
    if not series_members(events, series_id):
        raise SeriesNotFoundError(series_id)

    out = [replace(ev, **changes) if ev.series_id == series_id else ev for ev in events]
    if "start_time" in changes or "end_time" in changes:
        for ev in series_members(out, series_id):
            _check_times(ev)
    logger.info("Updated series %s (%s)", series_id, ", ".join(sorted(changes)) or "no changes")
    return out


def delete_event(events: list[EventRecord], event_id: str) -> list[EventRecord]:
    find_event(events, event_id)
    return [ev for ev in events if ev.id != event_id]


def delete_series(events: list[EventRecord], series_id: str) -> list[EventRecord]:
    members = series_members(events, series_id)
    if not members:
        raise SeriesNotFoundError(series_id)
    logger.info("Deleting series %s (%d events)", series_id, len(members))
    return [ev for ev in events if ev.series_id != series_id]
