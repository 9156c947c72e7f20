import tempfile
import unittest
from pathlib import Path

from recurcal.export_ics import export_events_to_ics
from recurcal.model import EventRecord, RepeatRule


class TestExportICS(unittest.TestCase):
    def test_export_creates_file_and_contains_calendar(self) -> None:
        events = [
            EventRecord(
                id="evt-1",
                title="Weekly sync",
                date="2025-10-06",
                start_time="10:00",
                end_time="11:00",
                description="Team meeting",
                location="Room A, 2nd floor",
                category="Work",
                repeat=RepeatRule(type="weekly", series_id="series-1"),
                notification_time=15,
            ),
            EventRecord(id="evt-2", title="Broken", date="2025-10-07", start_time="", end_time=""),
        ]

        with tempfile.TemporaryDirectory() as d:
            out = Path(d) / "out.ics"
            n = export_events_to_ics(events, out)
            self.assertEqual(n, 1)
            text = out.read_text(encoding="utf-8")
            self.assertIn("BEGIN:VCALENDAR", text)
            self.assertIn("BEGIN:VEVENT", text)
            self.assertIn("UID:evt-1", text)
            self.assertIn("DTSTART:20251006T100000", text)
            self.assertIn("SUMMARY:Weekly sync", text)
            self.assertIn("LOCATION:Room A\\, 2nd floor", text)
            self.assertIn("RELATED-TO:series-1", text)
            self.assertIn("TRIGGER:-PT15M", text)
            self.assertNotIn("Broken", text)

    def test_no_alarm_without_notification_time(self) -> None:
        events = [
            EventRecord(id="x", title="Quiet", date="2025-10-06", start_time="10:00", end_time="11:00", notification_time=0)
        ]
        with tempfile.TemporaryDirectory() as d:
            out = Path(d) / "out.ics"
            export_events_to_ics(events, out)
            self.assertNotIn("VALARM", out.read_text(encoding="utf-8"))


if __name__ == "__main__":
    unittest.main()
