"""
Recurrence engine: expand one event template into its series of records.

Flow of RecurrenceEngine.generate():
    1. repeat type 'none'  -> exactly one record, no series id
    2. resolve end date    -> rule end_date, else Dec 31 of the current year
    3. validate            -> end date before anchor raises RecurrenceRangeError
    4. new series id       -> shared by every record of this call
    5. date generator      -> daily / weekly / monthly / yearly
    6. one record per date -> fresh id each

The engine keeps no state between calls. The identifier source and the
clock are passed in, so tests can make both deterministic.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import asdict, replace
from datetime import datetime
from typing import Callable, Optional

from recurcal.errors import RecurrenceRangeError
from recurcal.model import EventRecord, EventTemplate
from recurcal.sequences import generate_dates

logger = logging.getLogger(__name__)


def _uuid4_str() -> str:
    return str(uuid.uuid4())


class RecurrenceEngine:
    def __init__(
        self,
        new_id: Callable[[], str] = _uuid4_str,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._new_id = new_id
        self._now = now

    def default_horizon(self) -> str:
        """
        End date used when the rule has none: December 31 of the current year.
        """
        return f"{self._now().year:04d}-12-31"

    def _record(self, template: EventTemplate, **overrides) -> EventRecord:
        fields = asdict(template)
        # asdict() turns the nested rule into a dict; keep the dataclass
        fields["repeat"] = template.repeat
        fields.update(overrides)
        return EventRecord(id=self._new_id(), **fields)

    def generate(self, template: EventTemplate) -> list[EventRecord]:
        """
        Expand template into its ordered list of event records.

        Raises RecurrenceRangeError if the (resolved) end date is before the
        template's anchor date. Nothing is produced in that case.
        """
        rule = template.repeat

        if not rule.is_recurring:
            return [self._record(template, repeat=replace(rule))]

        end_date = rule.end_date or self.default_horizon()

        # ISO dates compare correctly as strings
        if end_date < template.date:
            raise RecurrenceRangeError()

        series_id = self._new_id()
        dates = generate_dates(rule.type, template.date, end_date)
        series_rule = replace(rule, series_id=series_id)

        logger.debug(
            "Generated %s series %s: %d occurrences from %s to %s",
            rule.type,
            series_id,
            len(dates),
            template.date,
            end_date,
        )

        return [self._record(template, date=d, repeat=series_rule) for d in dates]


def generate_recurring_events(template: EventTemplate, engine: Optional[RecurrenceEngine] = None) -> list[EventRecord]:
    """
    Convenience wrapper around RecurrenceEngine.generate() using uuid4 ids
    and the system clock unless an engine is given.
    """
    if engine is None:
        engine = RecurrenceEngine()
    return engine.generate(template)
