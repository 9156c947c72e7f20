"""
Calendar arithmetic shared by the sequence generators.

All dates are plain calendar dates (datetime.date, no time, no timezone),
so stepping can never drift across daylight-saving or UTC offsets.
"""

from __future__ import annotations

from datetime import date, datetime


def is_leap_year(year: int) -> bool:
    """
    Gregorian leap-year test.

    Divisible by 4 and not by 100, or divisible by 400:
        2024 -> True, 1900 -> False, 2000 -> True, 2025 -> False
    """
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(year: int, month: int) -> int:
    """
    Number of days in the given month (month is 1-12).
    """
    if month == 2:
        return 29 if is_leap_year(year) else 28
    if month in (4, 6, 9, 11):
        return 30
    return 31


def add_months(year: int, month: int, offset: int) -> tuple[int, int]:
    """
    Move (year, month) forward by offset calendar months.
    """
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def parse_iso_date(text: str) -> date:
    """
    Convert 'YYYY-MM-DD' to a date. Raises ValueError for invalid input.
    """
    return datetime.strptime(text.strip(), "%Y-%m-%d").date()


def format_iso_date(d: date) -> str:
    # zero-padded, also for years < 1000
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"
