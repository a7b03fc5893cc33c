"""Scheduling core: events, admission rules, the weekly store, and hit testing."""

from .models import Event, EventColor
from .overlap import intervals_overlap, overlap_minutes
from .validation import (
    RejectReason,
    Rejection,
    ValidationResult,
    business_hours,
    business_hours_label,
    check_event_fields,
    validate_event,
)
from .schedule import ScheduleResult, WeekSchedule
from .store import ScheduleStateError, load_schedule, save_schedule
from .hit_test import ClickTarget, find_event_at, resolve_click

__all__ = [
    "ClickTarget",
    "Event",
    "EventColor",
    "RejectReason",
    "Rejection",
    "ScheduleResult",
    "ScheduleStateError",
    "ValidationResult",
    "WeekSchedule",
    "business_hours",
    "business_hours_label",
    "check_event_fields",
    "find_event_at",
    "intervals_overlap",
    "load_schedule",
    "overlap_minutes",
    "resolve_click",
    "save_schedule",
    "validate_event",
]
