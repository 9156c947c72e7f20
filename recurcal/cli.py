"""
CLI (Command Line Interface).

Quick terminal commands on the local event store, e.g.:

    recurcal create "Team meeting" --date 2025-10-06 --start 10:00 --end 11:00 --repeat weekly
    recurcal list [--series <series_id>] [--from 2025-10-01] [--to 2025-10-31]
    recurcal series
    recurcal update <event_id> [--all] --start 14:00 --end 15:00
    recurcal delete <event_id> [--all]
    recurcal conflicts
    recurcal export <file.ics>
    recurcal leap <year>

--all applies an update/delete to every occurrence of the event's series;
without it only the given occurrence is changed (and detached from its
series on update).
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

from recurcal.calendar_math import is_leap_year, parse_iso_date
from recurcal.config import config
from recurcal.conflicts import find_conflicts
from recurcal.errors import RecurcalError
from recurcal.export_ics import export_events_to_ics
from recurcal.model import REPEAT_TYPES, EventRecord, EventTemplate, RepeatRule
from recurcal.recurrence import RecurrenceEngine
from recurcal.series import (
    delete_event,
    delete_series,
    find_event,
    series_index,
    series_members,
    update_event,
    update_series,
)
from recurcal.storage import load_events, save_events

logger = logging.getLogger(__name__)

# CLI flag -> record field, for create and update
_TEXT_FIELDS = {
    "title": "title",
    "start": "start_time",
    "end": "end_time",
    "description": "description",
    "location": "location",
    "category": "category",
    "notify": "notification_time",
}


def _iso_date(text: str) -> str:
    """
    argparse type: accept only valid 'YYYY-MM-DD' dates.
    """
    try:
        parse_iso_date(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date (expected YYYY-MM-DD): {text!r}") from None
    return text.strip()


def _hhmm(text: str) -> str:
    parts = text.strip().split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise argparse.ArgumentTypeError(f"invalid time (expected HH:MM): {text!r}")
    h, m = int(parts[0]), int(parts[1])
    if not (0 <= h <= 23 and 0 <= m <= 59):
        raise argparse.ArgumentTypeError(f"invalid time (expected HH:MM): {text!r}")
    return f"{h:02d}:{m:02d}"


def _int_at_least(text: str, minimum: int) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}") from None
    if value < minimum:
        raise argparse.ArgumentTypeError(f"must be >= {minimum}: {text!r}")
    return value


def _positive_int(text: str) -> int:
    return _int_at_least(text, 1)


def _non_negative_int(text: str) -> int:
    # 0 means no reminder
    return _int_at_least(text, 0)


def _label(ev: EventRecord) -> str:
    return f"{ev.date} {ev.start_time}-{ev.end_time} {ev.title}"


def _cmd_create(args: argparse.Namespace, data_path: Path, engine: RecurrenceEngine) -> int:
    """
    Expand a new event (possibly recurring) and append it to the store.
    """
    if args.end <= args.start:
        print("End time must be after start time.")
        return 1

    template = EventTemplate(
        title=args.title,
        date=args.date,
        start_time=args.start,
        end_time=args.end,
        description=args.description,
        location=args.location,
        category=args.category,
        repeat=RepeatRule(type=args.repeat, interval=args.interval, end_date=args.until),
        notification_time=args.notify,
    )

    created = engine.generate(template)

    events = load_events(data_path)
    save_events(events + created, data_path)

    first = created[0]
    if first.series_id:
        print(f"Created {len(created)} {args.repeat} events ({created[0].date} .. {created[-1].date})")
        print(f"Series: {first.series_id}")
    else:
        print(f"Created event: {first.id}")
    return 0


def _cmd_list(args: argparse.Namespace, data_path: Path) -> int:
    """
    Show stored events as a table, optionally filtered by series or date range.
    """
    events = load_events(data_path)
    if args.series:
        events = series_members(events, args.series)
    if args.date_from:
        events = [ev for ev in events if ev.date >= args.date_from]
    if args.date_to:
        events = [ev for ev in events if ev.date <= args.date_to]

    if not events:
        print("No events.")
        return 0

    events = sorted(events, key=lambda ev: (ev.date, ev.start_time))

    table = Table(title=f"Events ({len(events)})", box=box.SIMPLE)
    table.add_column("Date")
    table.add_column("Time")
    table.add_column("Title")
    table.add_column("Repeat")
    table.add_column("ID", overflow="fold")
    for ev in events:
        repeat = ev.repeat.type if ev.repeat.is_recurring else ""
        table.add_row(ev.date, f"{ev.start_time}-{ev.end_time}", ev.title, repeat, ev.id)

    Console().print(table)
    return 0


def _cmd_series(args: argparse.Namespace, data_path: Path) -> int:
    """
    Print one line per series: id, type, number of occurrences, date range.
    """
    events = load_events(data_path)
    by_id = {ev.id: ev for ev in events}
    index = series_index(events)

    if not index:
        print("No recurring series.")
        return 0

    for sid, ids in sorted(index.items(), key=lambda kv: min(by_id[i].date for i in kv[1])):
        members = sorted((by_id[i] for i in ids), key=lambda ev: ev.date)
        first = members[0]
        print(f"{sid} | {first.repeat.type} | {len(members)} events | {members[0].date} .. {members[-1].date} | {first.title}")
    return 0


def _changes_from_args(args: argparse.Namespace) -> dict[str, Any]:
    changes: dict[str, Any] = {}
    for flag, fieldname in _TEXT_FIELDS.items():
        value = getattr(args, flag, None)
        if value is not None:
            changes[fieldname] = value
    if args.date is not None:
        changes["date"] = args.date
    return changes


def _cmd_update(args: argparse.Namespace, data_path: Path) -> int:
    events = load_events(data_path)
    changes = _changes_from_args(args)
    if not changes:
        print("Nothing to update.")
        return 1

    target = find_event(events, args.event_id)

    if args.all:
        if not target.series_id:
            print(f"Event {target.id} is not part of a series.")
            return 1
        if "date" in changes:
            print("--date cannot be used with --all.")
            return 1
        events = update_series(events, target.series_id, changes)
        print(f"Updated {len(series_members(events, target.series_id))} events of series {target.series_id}")
    else:
        events = update_event(events, target.id, changes)
        print(f"Updated: {_label(find_event(events, target.id))}")

    save_events(events, data_path)
    return 0


def _cmd_delete(args: argparse.Namespace, data_path: Path) -> int:
    events = load_events(data_path)
    target = find_event(events, args.event_id)

    if args.all:
        if not target.series_id:
            print(f"Event {target.id} is not part of a series.")
            return 1
        before = len(events)
        events = delete_series(events, target.series_id)
        print(f"Deleted {before - len(events)} events of series {target.series_id}")
    else:
        events = delete_event(events, target.id)
        print(f"Deleted: {_label(target)}")

    save_events(events, data_path)
    return 0


def _cmd_conflicts(args: argparse.Namespace, data_path: Path) -> int:
    """
    Print all detected overlaps between stored events.
    """
    confs = find_conflicts(load_events(data_path))
    if not confs:
        print("No conflicts found.")
        return 0

    confs_sorted = sorted(confs, key=lambda pair: (pair[0].date, pair[0].start_time))

    print(f"Conflicts found: {len(confs_sorted)}")
    for a, b in confs_sorted:
        print(f"- {_label(a)}  <->  {b.start_time}-{b.end_time} {b.title}")
    return 0


def _cmd_export(args: argparse.Namespace, data_path: Path) -> int:
    """
    Export stored events into an iCalendar (.ics) file.
    """
    events = load_events(data_path)
    if not events:
        print("No events to export.")
        return 0

    out_path = (args.out or "").strip()
    if not out_path:
        print("Please provide output .ics path.")
        return 1

    n = export_events_to_ics(events, out_path)
    print(f"Exported {n} events to: {out_path}")
    return 0


def _cmd_leap(args: argparse.Namespace) -> int:
    verdict = "is" if is_leap_year(args.year) else "is not"
    print(f"{args.year} {verdict} a leap year")
    return 0


def _add_field_options(p: argparse.ArgumentParser, required: bool) -> None:
    """
    Options shared by create and update. For update everything is optional
    and None means "leave unchanged".
    """
    default_text = "" if required else None
    p.add_argument("--start", type=_hhmm, required=required, help="Start time HH:MM")
    p.add_argument("--end", type=_hhmm, required=required, help="End time HH:MM")
    p.add_argument("--description", type=str, default=default_text)
    p.add_argument("--location", type=str, default=default_text)
    p.add_argument("--category", type=str, default=default_text)
    p.add_argument(
        "--notify",
        type=_non_negative_int,
        default=10 if required else None,
        help="Notification lead time in minutes",
    )


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="recurcal", description="Recurring calendar events CLI")
    parser.add_argument("--data", type=Path, default=None, help="Event store JSON file")
    sub = parser.add_subparsers(dest="command", required=True)

    p_create = sub.add_parser("create", help="Create an event or a recurring series")
    p_create.add_argument("title", type=str, help="Event title")
    p_create.add_argument("--date", type=_iso_date, required=True, help="(First) date YYYY-MM-DD")
    _add_field_options(p_create, required=True)
    p_create.add_argument("--repeat", choices=REPEAT_TYPES, default="none")
    p_create.add_argument("--interval", type=_positive_int, default=1)
    p_create.add_argument("--until", type=_iso_date, default=None, help="Last possible date (default: Dec 31 this year)")

    p_list = sub.add_parser("list", help="List events")
    p_list.add_argument("--series", type=str, default=None, help="Only events of this series id")
    p_list.add_argument("--from", dest="date_from", type=_iso_date, default=None)
    p_list.add_argument("--to", dest="date_to", type=_iso_date, default=None)

    sub.add_parser("series", help="List recurring series")

    p_update = sub.add_parser("update", help="Update one event, or its whole series with --all")
    p_update.add_argument("event_id", type=str)
    p_update.add_argument("--all", action="store_true", help="Apply to every event of the series")
    p_update.add_argument("--title", type=str, default=None)
    p_update.add_argument("--date", type=_iso_date, default=None, help="Move a single event")
    _add_field_options(p_update, required=False)

    p_delete = sub.add_parser("delete", help="Delete one event, or its whole series with --all")
    p_delete.add_argument("event_id", type=str)
    p_delete.add_argument("--all", action="store_true", help="Delete every event of the series")

    sub.add_parser("conflicts", help="Show overlapping events")

    p_export = sub.add_parser("export", help="Export events to .ics")
    p_export.add_argument("out", type=str, help="Output file path (e.g. out.ics)")

    p_leap = sub.add_parser("leap", help="Check whether a year is a leap year")
    p_leap.add_argument("year", type=int)

    return parser


def _dispatch(args: argparse.Namespace, data_path: Path, engine: RecurrenceEngine) -> int:
    if args.command == "create":
        return _cmd_create(args, data_path, engine)
    if args.command == "list":
        return _cmd_list(args, data_path)
    if args.command == "series":
        return _cmd_series(args, data_path)
    if args.command == "update":
        return _cmd_update(args, data_path)
    if args.command == "delete":
        return _cmd_delete(args, data_path)
    if args.command == "conflicts":
        return _cmd_conflicts(args, data_path)
    if args.command == "export":
        return _cmd_export(args, data_path)
    if args.command == "leap":
        return _cmd_leap(args)
    return 2


def main(argv: list[str] | None = None, engine: RecurrenceEngine | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    parser = build_parser()
    args = parser.parse_args(argv)

    data_path = args.data if args.data is not None else config.DATA_PATH
    if engine is None:
        engine = RecurrenceEngine()

    try:
        code = _dispatch(args, data_path, engine)
    except RecurcalError as exc:
        print(f"Error: {exc}")
        code = 1
    except ValueError as exc:
        logger.debug("Rejected input", exc_info=True)
        print(f"Error: {exc}")
        code = 1

    raise SystemExit(code)
