"""Admission rules for events entering the weekly schedule.

Rules run in a fixed order and stop at the first failure, so the order
decides which message a user sees when an event breaks several rules:

1. duration between 30 minutes and 3 hours,
2. business hours for the event's weekday (hour fields only),
3. at most 30 minutes of overlap with any other committed event.

Field checks (name and location) are a separate precondition performed by
:func:`check_event_fields` before the rules run.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, Optional

from .models import MAX_FIELD_LENGTH, Event
from .overlap import intervals_overlap, overlap_minutes

MIN_DURATION_MINUTES = 30
MAX_DURATION_MINUTES = 180
OVERLAP_TOLERANCE_MINUTES = 30

SATURDAY = 6
SUNDAY = 7

# ISO weekday -> (first allowed start hour, last allowed end hour)
_BUSINESS_HOURS: dict[int, tuple[int, int]] = {
    **{weekday: (8, 20) for weekday in range(1, 6)},
    SATURDAY: (8, 15),
}


class RejectReason(str, Enum):
    """Why a candidate event or a mutation was turned down."""

    DURATION_OUT_OF_RANGE = "duration_out_of_range"
    DAY_NOT_ALLOWED = "day_not_allowed"
    OUTSIDE_BUSINESS_HOURS = "outside_business_hours"
    EXCESSIVE_OVERLAP = "excessive_overlap"
    INVALID_FIELD = "invalid_field"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Rejection:
    """A recoverable, user-facing reason for refusing a request."""

    reason: RejectReason
    message: str
    conflicting_event_id: Optional[str] = None
    overlap_minutes: Optional[int] = None


@dataclass(frozen=True)
class ValidationResult:
    rejection: Optional[Rejection] = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None

    @classmethod
    def accept(cls) -> "ValidationResult":
        return cls()

    @classmethod
    def reject(
        cls,
        reason: RejectReason,
        message: str,
        *,
        conflicting_event_id: Optional[str] = None,
        overlap_minutes: Optional[int] = None,
    ) -> "ValidationResult":
        return cls(Rejection(reason, message, conflicting_event_id, overlap_minutes))


def business_hours(weekday: int) -> Optional[tuple[int, int]]:
    """Return the ``(start_hour, end_hour)`` band for an ISO weekday, or None on Sunday."""

    if not 1 <= weekday <= 7:
        raise ValueError(f"ISO weekday must be in 1..7, got {weekday}")
    return _BUSINESS_HOURS.get(weekday)


def business_hours_label(day: date) -> str:
    band = business_hours(day.isoweekday())
    if band is None:
        return "No Events Allowed"
    start_hour, end_hour = band
    return f"Work Hours: {_format_hour(start_hour)} - {_format_hour(end_hour)}"


def _format_hour(hour: int) -> str:
    display = hour % 12 or 12
    suffix = "AM" if hour < 12 else "PM"
    return f"{display}:00 {suffix}"


def check_event_fields(event: Event) -> Optional[Rejection]:
    """Return an ``INVALID_FIELD`` rejection when name or location is unusable."""

    name = event.name.strip()
    location = event.location.strip()
    if not name or not location:
        return Rejection(RejectReason.INVALID_FIELD, "Name and location are required")
    if len(event.name) > MAX_FIELD_LENGTH or len(event.location) > MAX_FIELD_LENGTH:
        return Rejection(
            RejectReason.INVALID_FIELD,
            f"Name and location must be {MAX_FIELD_LENGTH} characters or less",
        )
    return None


def validate_event(candidate: Event, existing: Iterable[Event]) -> ValidationResult:
    """Decide whether ``candidate`` may join ``existing``.

    ``existing`` may contain the candidate's own committed version; any event
    sharing the candidate's ``event_id`` is skipped in the overlap check.
    """

    duration = candidate.duration_minutes
    if not MIN_DURATION_MINUTES <= duration <= MAX_DURATION_MINUTES:
        return ValidationResult.reject(
            RejectReason.DURATION_OUT_OF_RANGE,
            "Event duration must be between 30 minutes and 3 hours",
        )

    weekday = candidate.start.isoweekday()
    band = business_hours(weekday)
    if band is None:
        return ValidationResult.reject(RejectReason.DAY_NOT_ALLOWED, "No events allowed on Sunday")

    start_hour, end_hour = band
    # Only the hour fields are compared; an end of 20:45 reads as hour 20.
    if candidate.start.hour < start_hour or candidate.end.hour > end_hour:
        if weekday == SATURDAY:
            message = "Saturday events must be between 8 AM and 3 PM"
        else:
            message = "Weekday events must be between 8 AM and 8 PM"
        return ValidationResult.reject(RejectReason.OUTSIDE_BUSINESS_HOURS, message)

    for other in existing:
        if candidate.event_id is not None and other.event_id == candidate.event_id:
            continue
        if not intervals_overlap(other, candidate):
            continue
        shared = overlap_minutes(other, candidate)
        if shared > OVERLAP_TOLERANCE_MINUTES:
            return ValidationResult.reject(
                RejectReason.EXCESSIVE_OVERLAP,
                "Events cannot overlap by more than 30 minutes",
                conflicting_event_id=other.event_id,
                overlap_minutes=shared,
            )

    return ValidationResult.accept()


__all__ = [
    "MAX_DURATION_MINUTES",
    "MIN_DURATION_MINUTES",
    "OVERLAP_TOLERANCE_MINUTES",
    "RejectReason",
    "Rejection",
    "ValidationResult",
    "business_hours",
    "business_hours_label",
    "check_event_fields",
    "validate_event",
]
