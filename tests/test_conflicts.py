"""
Unit tests for conflict detection.

Definition used here:
- A conflict exists if two events overlap in time on the same date.
- Touching endpoints (end == start) is NOT a conflict.
"""

import unittest

from recurcal.conflicts import find_conflicts
from recurcal.model import EventRecord


def ev(event_id: str, date: str, start: str, end: str) -> EventRecord:
    return EventRecord(id=event_id, title=event_id, date=date, start_time=start, end_time=end)


class TestConflicts(unittest.TestCase):
    def test_overlap_same_day(self) -> None:
        events = [ev("A", "2025-10-06", "10:00", "11:00"), ev("B", "2025-10-06", "10:30", "12:00")]
        confs = find_conflicts(events)
        self.assertEqual(len(confs), 1)
        self.assertEqual((confs[0][0].id, confs[0][1].id), ("A", "B"))

    def test_no_overlap_touching_end(self) -> None:
        events = [ev("A", "2025-10-06", "10:00", "11:00"), ev("B", "2025-10-06", "11:00", "12:00")]
        self.assertEqual(find_conflicts(events), [])

    def test_different_day_no_conflict(self) -> None:
        events = [ev("A", "2025-10-06", "10:00", "11:00"), ev("B", "2025-10-07", "10:30", "12:00")]
        self.assertEqual(find_conflicts(events), [])

    def test_invalid_times_are_ignored(self) -> None:
        events = [
            ev("A", "2025-10-06", "10:00", "11:00"),
            ev("B", "2025-10-06", "1030", "12:00"),
            ev("C", "2025-10-06", "12:00", "10:00"),
        ]
        self.assertEqual(find_conflicts(events), [])


if __name__ == "__main__":
    unittest.main()
