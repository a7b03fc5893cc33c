"""Top-level package for the single-user weekly scheduler."""

from __future__ import annotations

from .calendar import Event, EventColor, RejectReason, WeekSchedule, find_event_at
from .rendering import DEFAULT_LAYOUT, GridLayout, WeekRenderer

__all__ = [
    "__version__",
    "DEFAULT_LAYOUT",
    "Event",
    "EventColor",
    "GridLayout",
    "RejectReason",
    "WeekRenderer",
    "WeekSchedule",
    "find_event_at",
]

__version__ = "0.1.0"
