"""
iCalendar (.ics) export.

Every record becomes its own VEVENT (series are already expanded), so the
file imports into Google Calendar, Outlook or Apple Calendar without any
RRULE support. Times are written as floating local times.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from recurcal.model import EventRecord


def _ics_escape(text: str) -> str:
    """
    Escape text for ICS fields (very small subset, sufficient for our use).
    """
    return (
        text.replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace(";", "\\;").replace(",", "\\,")
    )


def _dt_local(date_yyyy_mm_dd: str, time_hh_mm: str) -> str:
    """
    Convert date + time to ICS local datetime string 'YYYYMMDDTHHMM00'.
    """
    dt = datetime.strptime(f"{date_yyyy_mm_dd} {time_hh_mm}", "%Y-%m-%d %H:%M")
    return dt.strftime("%Y%m%dT%H%M00")


def _vevent(ev: EventRecord, dtstamp: str) -> list[str]:
    dtstart = _dt_local(ev.date, ev.start_time)
    dtend = _dt_local(ev.date, ev.end_time)

    lines = [
        "BEGIN:VEVENT",
        f"UID:{_ics_escape(ev.id)}",
        f"DTSTAMP:{dtstamp}",
        f"DTSTART:{dtstart}",
        f"DTEND:{dtend}",
        f"SUMMARY:{_ics_escape(ev.title.strip() or 'Event')}",
    ]
    if ev.location.strip():
        lines.append(f"LOCATION:{_ics_escape(ev.location.strip())}")
    if ev.description.strip():
        lines.append(f"DESCRIPTION:{_ics_escape(ev.description.strip())}")
    if ev.category.strip():
        lines.append(f"CATEGORIES:{_ics_escape(ev.category.strip())}")
    if ev.series_id:
        # lets other tools group the occurrences again
        lines.append(f"RELATED-TO:{_ics_escape(ev.series_id)}")
    if ev.notification_time > 0:
        lines += [
            "BEGIN:VALARM",
            "ACTION:DISPLAY",
            f"DESCRIPTION:{_ics_escape(ev.title.strip() or 'Event')}",
            f"TRIGGER:-PT{ev.notification_time}M",
            "END:VALARM",
        ]
    lines.append("END:VEVENT")
    return lines


def export_events_to_ics(events: list[EventRecord], out_path: str | Path) -> int:
    """
    Export records to an .ics file. Returns number of exported events.
    Records whose date/time cannot be parsed are skipped.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    lines: list[str] = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//recurcal//EN",
        "CALSCALE:GREGORIAN",
    ]

    dtstamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    count = 0
    for ev in events:
        try:
            lines.extend(_vevent(ev, dtstamp))
        except ValueError:
            continue
        count += 1

    lines.append("END:VCALENDAR")

    # ICS standard uses CRLF
    out.write_text("\r\n".join(lines) + "\r\n", encoding="utf-8")
    return count
