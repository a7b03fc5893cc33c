"""JSON persistence for the weekly schedule."""

from __future__ import annotations

import json
import logging
import os
from datetime import date, datetime
from pathlib import Path
from typing import Any, Mapping

from .models import MAX_FIELD_LENGTH, Event, EventColor
from .schedule import WeekSchedule

LOGGER = logging.getLogger(__name__)

FORMAT_VERSION = 1


class ScheduleStateError(RuntimeError):
    """Raised when persisted schedule state cannot be loaded."""


def schedule_to_dict(schedule: WeekSchedule) -> dict[str, Any]:
    return {
        "version": FORMAT_VERSION,
        "anchor_monday": schedule.anchor_monday.isoformat(),
        "events": [_event_to_dict(event) for event in schedule.events],
    }


def schedule_from_dict(payload: Mapping[str, Any]) -> WeekSchedule:
    """Rebuild a schedule from its canonical mapping.

    Raises:
        ScheduleStateError: if the anchor date or any event record is malformed.
    """

    if not isinstance(payload, Mapping):
        raise ScheduleStateError("Schedule state must be a JSON object")

    try:
        anchor = date.fromisoformat(str(payload["anchor_monday"]))
    except (KeyError, ValueError) as exc:
        raise ScheduleStateError("Schedule state has a missing or invalid anchor_monday") from exc

    records = payload.get("events", [])
    if not isinstance(records, list):
        raise ScheduleStateError("Schedule state 'events' must be a list")

    events = [_event_from_dict(record, index) for index, record in enumerate(records)]
    try:
        return WeekSchedule(anchor, events)
    except ValueError as exc:
        raise ScheduleStateError(str(exc)) from exc


def load_schedule(path: str | Path) -> WeekSchedule | None:
    """Load the schedule stored at ``path``.

    Returns None when no state has been saved yet, so the caller can fall back
    to seeding a new week.
    """

    path = Path(path)
    if not path.exists():
        LOGGER.debug("No schedule state at %s", path)
        return None
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ScheduleStateError(f"Schedule file {str(path)!r} is not valid JSON: {exc}") from exc

    schedule = schedule_from_dict(payload)
    LOGGER.debug("Loaded %d event(s) from %s", len(schedule.events), path)
    return schedule


def save_schedule(schedule: WeekSchedule, path: str | Path) -> None:
    """Write the schedule to ``path``, replacing the previous file atomically."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        tmp_path.write_text(json.dumps(schedule_to_dict(schedule), indent=2) + "\n", encoding="utf-8")
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    LOGGER.debug("Saved %d event(s) to %s", len(schedule.events), path)


def _event_to_dict(event: Event) -> dict[str, Any]:
    return {
        "id": event.event_id,
        "name": event.name,
        "location": event.location,
        "start": event.start.isoformat(),
        "end": event.end.isoformat(),
        "color": event.color.value,
    }


def _event_from_dict(record: object, index: int) -> Event:
    if not isinstance(record, Mapping):
        raise ScheduleStateError(f"Event record #{index} is not an object")
    try:
        event = Event(
            name=_text_field(record, "name"),
            location=_text_field(record, "location"),
            start=datetime.fromisoformat(str(record["start"])),
            end=datetime.fromisoformat(str(record["end"])),
            color=EventColor.parse(record.get("color", EventColor.BLUE.value)),
            event_id=str(record["id"]) if record.get("id") else None,
        )
    except (KeyError, ValueError) as exc:
        raise ScheduleStateError(f"Event record #{index} is malformed: {exc}") from exc
    if event.start.tzinfo is not None or event.end.tzinfo is not None:
        raise ScheduleStateError(f"Event record #{index} carries a UTC offset; local times are expected")
    if event.end <= event.start:
        raise ScheduleStateError(f"Event record #{index} ends before it starts")
    return event


def _text_field(record: Mapping[str, Any], key: str) -> str:
    value = record[key]
    if not isinstance(value, str):
        raise ValueError(f"{key!r} must be a string, got {type(value).__name__}")
    if not value.strip() or len(value) > MAX_FIELD_LENGTH:
        raise ValueError(f"{key!r} must be 1-{MAX_FIELD_LENGTH} characters")
    return value


__all__ = [
    "ScheduleStateError",
    "load_schedule",
    "save_schedule",
    "schedule_from_dict",
    "schedule_to_dict",
]
