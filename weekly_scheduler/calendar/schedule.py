"""In-memory weekly schedule; the only place events are added, edited or removed."""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, fields, replace
from datetime import date, timedelta
from typing import Iterable, List, Optional

from .models import Event
from .validation import RejectReason, Rejection, check_event_fields, validate_event

LOGGER = logging.getLogger(__name__)

DAYS_IN_WEEK = 7
_EDITABLE_FIELDS = frozenset(f.name for f in fields(Event)) - {"event_id"}


@dataclass(frozen=True)
class ScheduleResult:
    """Outcome of a schedule mutation."""

    event_id: Optional[str] = None
    rejection: Optional[Rejection] = None

    @property
    def ok(self) -> bool:
        return self.rejection is None


def _not_found(event_id: str) -> ScheduleResult:
    return ScheduleResult(
        event_id=event_id,
        rejection=Rejection(RejectReason.NOT_FOUND, f"No event with id {event_id!r}"),
    )


class WeekSchedule:
    """Events anchored to the week starting at ``anchor_monday``.

    Events dated outside the anchored week may be stored; they are simply not
    part of :meth:`events_in_week`.
    """

    def __init__(self, anchor_monday: date, events: Iterable[Event] = ()) -> None:
        if anchor_monday.isoweekday() != 1:
            raise ValueError(f"Anchor date {anchor_monday.isoformat()} is not a Monday")
        self.anchor_monday = anchor_monday
        self._events: List[Event] = []
        self._lock = threading.Lock()
        seen: set[str] = set()
        for event in events:
            if event.event_id is None:
                event = replace(event, event_id=_new_event_id())
            elif event.event_id in seen:
                raise ValueError(f"Duplicate event id {event.event_id!r}")
            seen.add(event.event_id)
            self._events.append(event)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def events(self) -> tuple[Event, ...]:
        """Snapshot of every stored event in storage order."""

        return tuple(self._events)

    @property
    def week_end(self) -> date:
        return self.anchor_monday + timedelta(days=DAYS_IN_WEEK - 1)

    def week_days(self) -> List[date]:
        return [self.anchor_monday + timedelta(days=offset) for offset in range(DAYS_IN_WEEK)]

    def contains_date(self, day: date) -> bool:
        return self.anchor_monday <= day <= self.week_end

    def get(self, event_id: str) -> Optional[Event]:
        for event in self._events:
            if event.event_id == event_id:
                return event
        return None

    def events_on(self, day: date) -> List[Event]:
        """Events starting on ``day`` in chronological order."""

        matches = [event for event in self._events if event.start.date() == day]
        matches.sort(key=lambda event: (event.start, event.end))
        return matches

    def events_in_week(self) -> List[Event]:
        """Events starting inside the anchored week, ordered by ``(start, end)``."""

        matches = [event for event in self._events if self.contains_date(event.start.date())]
        matches.sort(key=lambda event: (event.start, event.end))
        return matches

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add(self, candidate: Event) -> ScheduleResult:
        """Validate ``candidate`` and store it under a fresh identifier."""

        # a fresh add is never its own predecessor in the overlap check
        candidate = replace(candidate, event_id=None)
        rejection = check_event_fields(candidate)
        if rejection is not None:
            return self._rejected(None, rejection, "add")

        with self._lock:
            result = validate_event(candidate, self._events)
            if not result.accepted:
                return self._rejected(None, result.rejection, "add")

            event = replace(candidate, event_id=_new_event_id())
            self._events.append(event)

        LOGGER.info("Added event %s (%s, %s)", event.event_id, event.name, event.start.isoformat())
        return ScheduleResult(event_id=event.event_id)

    def update(self, event_id: str, **changes: object) -> ScheduleResult:
        """Apply ``changes`` to the stored event and re-validate it.

        The edited event is checked against every other event but never against
        its own previous version. On success the event keeps its identifier and
        its position in storage.
        """

        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise TypeError(f"Cannot update event field(s): {', '.join(sorted(unknown))}")

        with self._lock:
            index = self._index_of(event_id)
            if index is None:
                LOGGER.info("Update rejected: no event %s", event_id)
                return _not_found(event_id)

            revised = replace(self._events[index], **changes)  # type: ignore[arg-type]
            rejection = check_event_fields(revised)
            if rejection is None:
                others = self._events[:index] + self._events[index + 1 :]
                rejection = validate_event(revised, others).rejection
            if rejection is not None:
                return self._rejected(event_id, rejection, "update")

            self._events[index] = revised

        LOGGER.info("Updated event %s", event_id)
        return ScheduleResult(event_id=event_id)

    def remove(self, event_id: str) -> ScheduleResult:
        with self._lock:
            index = self._index_of(event_id)
            if index is None:
                LOGGER.info("Remove rejected: no event %s", event_id)
                return _not_found(event_id)
            del self._events[index]

        LOGGER.info("Removed event %s", event_id)
        return ScheduleResult(event_id=event_id)

    # ------------------------------------------------------------------
    def _index_of(self, event_id: str) -> Optional[int]:
        for index, event in enumerate(self._events):
            if event.event_id == event_id:
                return index
        return None

    def _rejected(
        self,
        event_id: Optional[str],
        rejection: Optional[Rejection],
        action: str,
    ) -> ScheduleResult:
        assert rejection is not None
        LOGGER.info("%s rejected (%s): %s", action.capitalize(), rejection.reason.value, rejection.message)
        return ScheduleResult(event_id=event_id, rejection=rejection)


def _new_event_id() -> str:
    return uuid.uuid4().hex


__all__ = ["DAYS_IN_WEEK", "ScheduleResult", "WeekSchedule"]
