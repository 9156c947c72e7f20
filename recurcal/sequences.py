"""
Occurrence date sequences, one generator per recurrence unit.

Every generator receives (anchor_date, end_date) as 'YYYY-MM-DD' strings
with anchor_date <= end_date and returns the ordered list of occurrence
dates in the same format.

Candidates are computed from an integer offset (n days / n months / n years
after the anchor) instead of stepping a mutable date, so month and year
boundaries cannot accumulate errors:

- daily:   anchor + n days
- weekly:  anchor + 7n days (same weekday as the anchor)
- monthly: anchor day-of-month in the n-th month, skipped where the month
           is too short (31 -> only 31-day months, 30 -> never February)
- yearly:  anchor month/day in the n-th year, Feb 29 only in leap years
"""

from __future__ import annotations

from datetime import MAXYEAR, date, timedelta
from typing import Callable, Optional

from recurcal.calendar_math import add_months, days_in_month, format_iso_date, is_leap_year, parse_iso_date

DAYS_PER_WEEK = 7

# (floor, occurrence): floor is the earliest date the n-th period can touch,
# occurrence is None when the skip rule drops that period.
Candidate = tuple[date, Optional[date]]


def daily_candidate(anchor: date, n: int) -> date:
    return anchor + timedelta(days=n)


def weekly_candidate(anchor: date, n: int) -> date:
    return anchor + timedelta(days=DAYS_PER_WEEK * n)


def monthly_candidate(anchor: date, n: int) -> Optional[Candidate]:
    """
    n-th monthly candidate after the anchor, or None past the last
    representable year.
    """
    year, month = add_months(anchor.year, anchor.month, n)
    if year > MAXYEAR:
        return None
    floor = date(year, month, 1)
    if anchor.day > days_in_month(year, month):
        return floor, None
    return floor, date(year, month, anchor.day)


def yearly_candidate(anchor: date, n: int) -> Optional[Candidate]:
    year = anchor.year + n
    if year > MAXYEAR:
        return None
    floor = date(year, 1, 1)
    if anchor.month == 2 and anchor.day == 29 and not is_leap_year(year):
        return floor, None
    return floor, date(year, anchor.month, anchor.day)


def _collect(candidate: Callable[[date, int], Optional[Candidate]], anchor: date, end: date) -> list[str]:
    """
    Walk candidates n = 0, 1, 2, ... until one lies beyond end.
    """
    dates: list[str] = []
    n = 0
    while True:
        cand = candidate(anchor, n)
        if cand is None:
            break
        floor, occurrence = cand
        # even the start of this period is past the end
        if floor > end:
            break
        if occurrence is not None:
            if occurrence > end:
                break
            dates.append(format_iso_date(occurrence))
        n += 1
    return dates


def generate_daily_dates(anchor_date: str, end_date: str) -> list[str]:
    """
    Every day from anchor_date to end_date inclusive.

        generate_daily_dates('2025-10-01', '2025-10-03')
        -> ['2025-10-01', '2025-10-02', '2025-10-03']
    """
    anchor = parse_iso_date(anchor_date)
    span = (parse_iso_date(end_date) - anchor).days
    return [format_iso_date(daily_candidate(anchor, n)) for n in range(span + 1)]


def generate_weekly_dates(anchor_date: str, end_date: str) -> list[str]:
    """
    Every 7 days from anchor_date; the last week is dropped if it would
    land after end_date.

        generate_weekly_dates('2025-10-06', '2025-10-25')
        -> ['2025-10-06', '2025-10-13', '2025-10-20']
    """
    anchor = parse_iso_date(anchor_date)
    span = (parse_iso_date(end_date) - anchor).days
    return [format_iso_date(weekly_candidate(anchor, n)) for n in range(span // DAYS_PER_WEEK + 1)]


def generate_monthly_dates(anchor_date: str, end_date: str) -> list[str]:
    """
    Same day-of-month in every month that has it.

        generate_monthly_dates('2025-01-31', '2025-06-30')
        -> ['2025-01-31', '2025-03-31', '2025-05-31']
    """
    return _collect(monthly_candidate, parse_iso_date(anchor_date), parse_iso_date(end_date))


def generate_yearly_dates(anchor_date: str, end_date: str) -> list[str]:
    """
    Same month/day every year; Feb 29 only in leap years.

        generate_yearly_dates('2024-02-29', '2028-12-31')
        -> ['2024-02-29', '2028-02-29']
    """
    return _collect(yearly_candidate, parse_iso_date(anchor_date), parse_iso_date(end_date))


GENERATORS: dict[str, Callable[[str, str], list[str]]] = {
    "daily": generate_daily_dates,
    "weekly": generate_weekly_dates,
    "monthly": generate_monthly_dates,
    "yearly": generate_yearly_dates,
}


def generate_dates(repeat_type: str, anchor_date: str, end_date: str) -> list[str]:
    """
    Dispatch to the generator for repeat_type.
    Raises ValueError for 'none' or any unknown type.
    """
    try:
        generator = GENERATORS[repeat_type]
    except KeyError:
        raise ValueError(f"No date generator for repeat type: {repeat_type!r}") from None
    return generator(anchor_date, end_date)
