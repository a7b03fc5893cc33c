from __future__ import annotations

from datetime import date, datetime
from typing import Callable

import pytest

from weekly_scheduler.calendar import Event, EventColor

MONDAY = date(2024, 1, 15)


def at(day: int, clock: str) -> datetime:
    """Return the timestamp ``clock`` (HH:MM) on day ``day`` of January 2024."""

    hour, minute = (int(part) for part in clock.split(":"))
    return datetime(2024, 1, day, hour, minute)


def make_event(
    start: str,
    end: str,
    *,
    day: int = 16,
    name: str = "Standup",
    location: str = "Room A",
    color: EventColor = EventColor.BLUE,
    event_id: str | None = None,
) -> Event:
    return Event(
        name=name,
        location=location,
        start=at(day, start),
        end=at(day, end),
        color=color,
        event_id=event_id,
    )


@pytest.fixture
def monday() -> date:
    return MONDAY


@pytest.fixture
def event_factory() -> Callable[..., Event]:
    return make_event
