"""
Tests for CLI entry points.

Every test works on a temporary event store (--data) so the real
store in the package directory is never touched.
"""

import io
import itertools
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from datetime import datetime
from pathlib import Path

from recurcal.cli import main
from recurcal.recurrence import RecurrenceEngine
from recurcal.storage import load_events


def fixed_engine() -> RecurrenceEngine:
    counter = itertools.count(1)
    return RecurrenceEngine(new_id=lambda: f"id-{next(counter)}", now=lambda: datetime(2025, 12, 1))


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.data = Path(self._tmp.name) / "events.json"
        self.engine = fixed_engine()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def run_cli(self, *argv: str) -> tuple[int, str]:
        buf = io.StringIO()
        with redirect_stdout(buf):
            with self.assertRaises(SystemExit) as ctx:
                main(["--data", str(self.data), *argv], engine=self.engine)
        return ctx.exception.code, buf.getvalue()

    def create_weekly(self) -> None:
        code, _ = self.run_cli(
            "create", "Weekly sync",
            "--date", "2025-10-06", "--start", "10:00", "--end", "11:00",
            "--repeat", "weekly", "--until", "2025-10-27",
        )
        self.assertEqual(code, 0)

    def test_create_weekly_series(self) -> None:
        self.create_weekly()
        events = load_events(self.data)
        self.assertEqual([ev.date for ev in events], ["2025-10-06", "2025-10-13", "2025-10-20", "2025-10-27"])
        self.assertEqual(len({ev.series_id for ev in events}), 1)

    def test_create_without_until_uses_year_end(self) -> None:
        code, out = self.run_cli(
            "create", "Standup", "--date", "2025-12-28", "--start", "09:00", "--end", "09:15", "--repeat", "daily"
        )
        self.assertEqual(code, 0)
        self.assertIn("Created 4 daily events", out)
        self.assertEqual(load_events(self.data)[-1].date, "2025-12-31")

    def test_create_end_before_start_fails(self) -> None:
        code, out = self.run_cli(
            "create", "Bad", "--date", "2025-10-15", "--start", "10:00", "--end", "11:00",
            "--repeat", "daily", "--until", "2025-10-01",
        )
        self.assertEqual(code, 1)
        self.assertIn("recurrence end date must be after the start date", out)
        self.assertEqual(load_events(self.data), [])

    def test_invalid_date_is_rejected_by_parser(self) -> None:
        with redirect_stdout(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            main(["--data", str(self.data), "create", "X", "--date", "2025-02-30", "--start", "10:00", "--end", "11:00"])
        self.assertNotEqual(ctx.exception.code, 0)

    def test_update_single_detaches(self) -> None:
        self.create_weekly()
        target = load_events(self.data)[1]
        code, _ = self.run_cli("update", target.id, "--start", "14:00", "--end", "15:00")
        self.assertEqual(code, 0)

        events = {ev.id: ev for ev in load_events(self.data)}
        self.assertEqual(events[target.id].start_time, "14:00")
        self.assertEqual(events[target.id].repeat.type, "none")
        others = [ev for ev in events.values() if ev.id != target.id]
        self.assertTrue(all(ev.series_id == target.series_id for ev in others))

    def test_update_all_changes_whole_series(self) -> None:
        self.create_weekly()
        target = load_events(self.data)[0]
        code, out = self.run_cli("update", target.id, "--all", "--location", "Room B")
        self.assertEqual(code, 0)
        self.assertIn("Updated 4 events", out)
        self.assertTrue(all(ev.location == "Room B" for ev in load_events(self.data)))

    def test_update_all_rejects_end_before_start(self) -> None:
        self.create_weekly()
        target = load_events(self.data)[0]
        code, out = self.run_cli("update", target.id, "--all", "--end", "09:00")
        self.assertEqual(code, 1)
        self.assertIn("End time must be after start time", out)
        self.assertTrue(all(ev.end_time == "11:00" for ev in load_events(self.data)))

    def test_update_single_rejects_end_before_start(self) -> None:
        self.create_weekly()
        target = load_events(self.data)[1]
        code, _ = self.run_cli("update", target.id, "--start", "11:30")
        self.assertEqual(code, 1)
        stored = {ev.id: ev for ev in load_events(self.data)}[target.id]
        self.assertEqual((stored.start_time, stored.repeat.type), ("10:00", "weekly"))

    def test_negative_notify_is_rejected_by_parser(self) -> None:
        with redirect_stdout(io.StringIO()), redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            main(["--data", str(self.data), "create", "X", "--date", "2025-10-01", "--start", "10:00", "--end", "11:00", "--notify", "-5"])
        self.assertNotEqual(ctx.exception.code, 0)
        self.assertEqual(load_events(self.data), [])

    def test_zero_notify_is_accepted(self) -> None:
        code, _ = self.run_cli("create", "X", "--date", "2025-10-01", "--start", "10:00", "--end", "11:00", "--notify", "0")
        self.assertEqual(code, 0)
        self.assertEqual(load_events(self.data)[0].notification_time, 0)

    def test_delete_all_removes_series(self) -> None:
        self.create_weekly()
        self.run_cli("create", "Dentist", "--date", "2025-10-09", "--start", "08:00", "--end", "09:00")
        target = load_events(self.data)[0]
        code, _ = self.run_cli("delete", target.id, "--all")
        self.assertEqual(code, 0)
        self.assertEqual([ev.title for ev in load_events(self.data)], ["Dentist"])

    def test_delete_unknown_id_fails(self) -> None:
        code, out = self.run_cli("delete", "does-not-exist")
        self.assertEqual(code, 1)
        self.assertIn("No event with id", out)

    def test_list_and_conflicts(self) -> None:
        self.create_weekly()
        self.run_cli("create", "Overlap", "--date", "2025-10-13", "--start", "10:30", "--end", "11:30")

        code, out = self.run_cli("list")
        self.assertEqual(code, 0)
        self.assertIn("Weekly sync", out)
        self.assertIn("Overlap", out)

        code, out = self.run_cli("conflicts")
        self.assertEqual(code, 0)
        self.assertIn("Conflicts found: 1", out)

    def test_leap(self) -> None:
        code, out = self.run_cli("leap", "2024")
        self.assertEqual(code, 0)
        self.assertIn("2024 is a leap year", out)


if __name__ == "__main__":
    unittest.main()
