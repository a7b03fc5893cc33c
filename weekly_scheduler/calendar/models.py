"""Event data model shared by the validator, the schedule, and the renderer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

MAX_FIELD_LENGTH = 32

RGB = tuple[int, int, int]


class EventColor(str, Enum):
    """Fixed palette an event can be tagged with."""

    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    ORANGE = "orange"
    GRAY = "gray"

    @property
    def rgb(self) -> RGB:
        return _FILL_COLORS[self]

    @property
    def tint(self) -> RGB:
        """Light companion shade used behind forms and list rows."""

        return _TINT_COLORS[self]

    @classmethod
    def parse(cls, value: str | "EventColor") -> "EventColor":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            choices = ", ".join(color.value for color in cls)
            raise ValueError(f"Unknown color {value!r}; expected one of {choices}") from exc


_FILL_COLORS: dict[EventColor, RGB] = {
    EventColor.RED: (255, 0, 0),
    EventColor.GREEN: (0, 255, 0),
    EventColor.YELLOW: (255, 255, 0),
    EventColor.BLUE: (0, 0, 255),
    EventColor.ORANGE: (255, 200, 0),
    EventColor.GRAY: (128, 128, 128),
}

_TINT_COLORS: dict[EventColor, RGB] = {
    EventColor.RED: (255, 200, 200),
    EventColor.GREEN: (200, 255, 200),
    EventColor.YELLOW: (255, 255, 200),
    EventColor.BLUE: (200, 200, 255),
    EventColor.ORANGE: (255, 225, 200),
    EventColor.GRAY: (225, 225, 225),
}


@dataclass(frozen=True)
class Event:
    """A time-boxed schedule entry.

    ``event_id`` is ``None`` while the event is only a candidate; the schedule
    assigns an identifier when the event is first committed and keeps it
    across edits.
    """

    name: str
    location: str
    start: datetime
    end: datetime
    color: EventColor = EventColor.BLUE
    event_id: Optional[str] = None

    @property
    def duration_minutes(self) -> int:
        seconds = (self.end - self.start).total_seconds()
        # whole minutes, truncated toward zero
        return int(seconds / 60)

    @property
    def is_candidate(self) -> bool:
        return self.event_id is None


__all__ = ["Event", "EventColor", "MAX_FIELD_LENGTH", "RGB"]
