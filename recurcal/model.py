"""
Central data model definitions used across the project.

This module defines the canonical structure of templates, repeat rules and
event records so that:
- the engine, the series operations and the storage share the same field names
- the JSON written by storage uses exactly the same keys (snake_case)
- templates and records stay immutable (frozen dataclasses); changes are
  made with dataclasses.replace()
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional

REPEAT_TYPES = ("none", "daily", "weekly", "monthly", "yearly")


@dataclass(frozen=True)
class RepeatRule:
    """
    How an event repeats.

    interval is carried for compatibility; generation always steps by one
    unit. series_id is empty on input and filled in by the engine for every
    type except 'none'.
    """

    type: str = "none"
    interval: int = 1
    end_date: Optional[str] = None
    series_id: Optional[str] = None

    @property
    def is_recurring(self) -> bool:
        return self.type != "none"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RepeatRule:
        repeat_type = str(data.get("type", "none")).strip().lower()
        if repeat_type not in REPEAT_TYPES:
            raise ValueError(f"Unknown repeat type: {repeat_type!r}")
        return cls(
            type=repeat_type,
            interval=int(data.get("interval", 1)),
            end_date=data.get("end_date") or None,
            series_id=data.get("series_id") or None,
        )


@dataclass(frozen=True)
class EventTemplate:
    """
    Input to the recurrence engine: one event plus its repeat rule.

    date is the anchor date ('YYYY-MM-DD'), i.e. the first occurrence.
    """

    title: str
    date: str
    start_time: str
    end_time: str
    description: str = ""
    location: str = ""
    category: str = ""
    repeat: RepeatRule = field(default_factory=RepeatRule)
    notification_time: int = 10

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EventTemplate:
        return cls(**_common_fields(data))


@dataclass(frozen=True)
class EventRecord:
    """
    One concrete occurrence as produced by the engine and kept by storage.
    """

    id: str
    title: str
    date: str
    start_time: str
    end_time: str
    description: str = ""
    location: str = ""
    category: str = ""
    repeat: RepeatRule = field(default_factory=RepeatRule)
    notification_time: int = 10

    @property
    def series_id(self) -> Optional[str]:
        return self.repeat.series_id

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EventRecord:
        event_id = str(data.get("id", "")).strip()
        if not event_id:
            raise ValueError("Event record without id")
        return cls(id=event_id, **_common_fields(data))


def _common_fields(data: dict[str, Any]) -> dict[str, Any]:
    """
    Shared field extraction for templates and records.
    Missing free-text fields default to "".
    """
    repeat_raw = data.get("repeat") or {}
    if not isinstance(repeat_raw, dict):
        raise ValueError(f"Invalid repeat value: {repeat_raw!r}")
    return {
        "title": str(data.get("title", "")),
        "date": str(data["date"]).strip(),
        "start_time": str(data.get("start_time", "")).strip(),
        "end_time": str(data.get("end_time", "")).strip(),
        "description": str(data.get("description") or ""),
        "location": str(data.get("location") or ""),
        "category": str(data.get("category") or ""),
        "repeat": RepeatRule.from_dict(repeat_raw),
        "notification_time": int(data.get("notification_time", 10)),
    }
