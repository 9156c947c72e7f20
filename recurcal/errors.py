"""
Exception types raised by recurcal.

The CLI catches RecurcalError subclasses and turns them into a message
plus a nonzero exit code.
"""

from __future__ import annotations


class RecurcalError(Exception):
    """Base class for all recurcal errors."""


class RecurrenceRangeError(RecurcalError, ValueError):
    """The recurrence end date lies before the anchor date."""

    def __init__(self, message: str = "recurrence end date must be after the start date") -> None:
        super().__init__(message)


class EventNotFoundError(RecurcalError, LookupError):
    def __init__(self, event_id: str) -> None:
        super().__init__(f"No event with id: {event_id}")
        self.event_id = event_id


class SeriesNotFoundError(RecurcalError, LookupError):
    def __init__(self, series_id: str) -> None:
        super().__init__(f"No series with id: {series_id}")
        self.series_id = series_id
