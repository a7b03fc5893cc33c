from __future__ import annotations

from datetime import date

import pytest

from weekly_scheduler.calendar.validation import (
    RejectReason,
    business_hours,
    business_hours_label,
    check_event_fields,
    validate_event,
)

from conftest import make_event


def _reason(result) -> RejectReason | None:
    return None if result.accepted else result.rejection.reason


def test_standup_on_tuesday_is_accepted() -> None:
    result = validate_event(make_event("09:00", "10:00"), [])

    assert result.accepted
    assert result.rejection is None


@pytest.mark.parametrize(
    "start, end, accepted",
    [
        ("09:00", "09:15", False),
        ("09:00", "09:29", False),
        ("09:00", "09:30", True),
        ("09:00", "12:00", True),
        ("09:00", "12:01", False),
        ("10:00", "09:00", False),
    ],
)
def test_duration_bounds(start: str, end: str, accepted: bool) -> None:
    result = validate_event(make_event(start, end), [])

    if accepted:
        assert result.accepted
    else:
        assert _reason(result) is RejectReason.DURATION_OUT_OF_RANGE
        assert result.rejection.message == "Event duration must be between 30 minutes and 3 hours"


def test_sunday_is_never_allowed() -> None:
    result = validate_event(make_event("10:00", "11:00", day=21), [])

    assert _reason(result) is RejectReason.DAY_NOT_ALLOWED
    assert result.rejection.message == "No events allowed on Sunday"


def test_duration_is_checked_before_weekday() -> None:
    result = validate_event(make_event("10:00", "10:10", day=21), [])

    assert _reason(result) is RejectReason.DURATION_OUT_OF_RANGE


def test_weekday_start_before_eight_is_rejected() -> None:
    result = validate_event(make_event("07:00", "09:00", day=17), [])

    assert _reason(result) is RejectReason.OUTSIDE_BUSINESS_HOURS
    assert result.rejection.message == "Weekday events must be between 8 AM and 8 PM"


@pytest.mark.parametrize(
    "day, start, end, accepted",
    [
        (17, "18:00", "20:00", True),
        # only the hour field is compared, so 20:45 still reads as hour 20
        (17, "18:30", "20:45", True),
        (17, "19:00", "21:00", False),
        (20, "08:00", "10:00", True),
        (20, "13:00", "15:00", True),
        (20, "14:00", "15:45", True),
        (20, "14:00", "16:00", False),
        (20, "07:30", "09:00", False),
    ],
)
def test_business_hours_compare_hours_only(day: int, start: str, end: str, accepted: bool) -> None:
    result = validate_event(make_event(start, end, day=day), [])

    if accepted:
        assert result.accepted
    else:
        assert _reason(result) is RejectReason.OUTSIDE_BUSINESS_HOURS


def test_saturday_message() -> None:
    result = validate_event(make_event("14:00", "16:00", day=20), [])

    assert result.rejection.message == "Saturday events must be between 8 AM and 3 PM"


def test_overlap_beyond_tolerance_names_the_other_event() -> None:
    existing = make_event("09:00", "10:00", event_id="existing")
    candidate = make_event("09:15", "10:15", name="Review")

    result = validate_event(candidate, [existing])

    assert _reason(result) is RejectReason.EXCESSIVE_OVERLAP
    assert result.rejection.conflicting_event_id == "existing"
    assert result.rejection.overlap_minutes == 45
    assert result.rejection.message == "Events cannot overlap by more than 30 minutes"


@pytest.mark.parametrize(
    "start, end, accepted",
    [
        ("09:45", "10:45", True),
        ("09:50", "10:50", True),
        ("09:30", "10:30", True),
        ("09:29", "10:29", False),
        ("10:00", "11:00", True),
    ],
)
def test_overlap_tolerance(start: str, end: str, accepted: bool) -> None:
    existing = make_event("09:00", "10:00", event_id="existing")

    result = validate_event(make_event(start, end), [existing])

    assert result.accepted is accepted


def test_first_conflict_in_storage_order_is_reported() -> None:
    first = make_event("09:00", "10:00", event_id="first")
    second = make_event("09:30", "10:30", event_id="second")

    result = validate_event(make_event("09:00", "10:30"), [first, second])

    assert result.rejection.conflicting_event_id == "first"


def test_event_is_not_compared_with_itself() -> None:
    stored = make_event("09:00", "10:00", event_id="same")
    edited = make_event("09:00", "10:00", name="Renamed", event_id="same")

    assert validate_event(edited, [stored]).accepted


def test_identical_fields_with_different_ids_conflict() -> None:
    stored = make_event("09:00", "10:00", event_id="one")
    twin = make_event("09:00", "10:00", event_id="two")

    assert _reason(validate_event(twin, [stored])) is RejectReason.EXCESSIVE_OVERLAP


@pytest.mark.parametrize(
    "name, location, message",
    [
        ("", "Room A", "Name and location are required"),
        ("Standup", "   ", "Name and location are required"),
        ("x" * 33, "Room A", "Name and location must be 32 characters or less"),
        ("Standup", "y" * 33, "Name and location must be 32 characters or less"),
    ],
)
def test_invalid_fields(name: str, location: str, message: str) -> None:
    rejection = check_event_fields(make_event("09:00", "10:00", name=name, location=location))

    assert rejection is not None
    assert rejection.reason is RejectReason.INVALID_FIELD
    assert rejection.message == message


def test_field_length_limit_is_inclusive() -> None:
    event = make_event("09:00", "10:00", name="x" * 32, location="y" * 32)

    assert check_event_fields(event) is None


def test_business_hours_table() -> None:
    assert business_hours(1) == (8, 20)
    assert business_hours(5) == (8, 20)
    assert business_hours(6) == (8, 15)
    assert business_hours(7) is None
    with pytest.raises(ValueError):
        business_hours(0)


@pytest.mark.parametrize(
    "day, label",
    [
        (date(2024, 1, 16), "Work Hours: 8:00 AM - 8:00 PM"),
        (date(2024, 1, 20), "Work Hours: 8:00 AM - 3:00 PM"),
        (date(2024, 1, 21), "No Events Allowed"),
    ],
)
def test_business_hours_label(day: date, label: str) -> None:
    assert business_hours_label(day) == label
