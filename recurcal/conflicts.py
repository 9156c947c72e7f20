"""
Conflict detection.

Given event records, detect overlaps on the same date.
Overlap rule:
    start < other_end AND end > other_start
Two occurrences of the same series never share a date, so only records
from different events/series can conflict.
"""

from __future__ import annotations

from collections import defaultdict

from recurcal.model import EventRecord


def _time_to_minutes(hhmm: str) -> int:
    """
    Convert 'HH:MM' to minutes since midnight.
    Raises ValueError for invalid formats.
    """
    parts = hhmm.strip().split(":")
    if len(parts) != 2:
        raise ValueError(f"Invalid time format: {hhmm!r}")
    h = int(parts[0])
    m = int(parts[1])
    if not (0 <= h <= 23 and 0 <= m <= 59):
        raise ValueError(f"Invalid time value: {hhmm!r}")
    return h * 60 + m


def _overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    return a_start < b_end and a_end > b_start


def find_conflicts(events: list[EventRecord]) -> list[tuple[EventRecord, EventRecord]]:
    """
    Find overlapping record pairs (A,B), each pair once, A before B in input order.
    Records with missing/invalid times or end <= start are ignored.
    """
    by_date: dict[str, list[tuple[int, int, EventRecord]]] = defaultdict(list)
    for ev in events:
        try:
            start = _time_to_minutes(ev.start_time)
            end = _time_to_minutes(ev.end_time)
        except ValueError:
            continue
        if end <= start:
            continue
        by_date[ev.date].append((start, end, ev))

    conflicts: list[tuple[EventRecord, EventRecord]] = []
    # O(n^2) per day is fine for personal calendars
    for day_events in by_date.values():
        for i in range(len(day_events)):
            s1, e1, ev1 = day_events[i]
            for j in range(i + 1, len(day_events)):
                s2, e2, ev2 = day_events[j]
                if _overlaps(s1, e1, s2, e2):
                    conflicts.append((ev1, ev2))

    return conflicts
