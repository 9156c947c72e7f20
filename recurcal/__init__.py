"""
recurcal: expand recurring calendar events into concrete occurrences.
"""

from recurcal.calendar_math import is_leap_year
from recurcal.errors import RecurrenceRangeError
from recurcal.model import EventRecord, EventTemplate, RepeatRule
from recurcal.recurrence import RecurrenceEngine, generate_recurring_events

__all__ = [
    "EventRecord",
    "EventTemplate",
    "RecurrenceEngine",
    "RecurrenceRangeError",
    "RepeatRule",
    "generate_recurring_events",
    "is_leap_year",
]
