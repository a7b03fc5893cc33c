from __future__ import annotations

from datetime import date

import pytest

from weekly_scheduler.calendar import EventColor, RejectReason, WeekSchedule

from conftest import MONDAY, at, make_event


def test_add_assigns_identifier() -> None:
    schedule = WeekSchedule(MONDAY)

    result = schedule.add(make_event("09:00", "10:00"))

    assert result.ok
    assert result.event_id
    stored = schedule.get(result.event_id)
    assert stored is not None
    assert stored.name == "Standup"
    assert stored.event_id == result.event_id


def test_rejected_add_leaves_store_unchanged() -> None:
    schedule = WeekSchedule(MONDAY)
    schedule.add(make_event("09:00", "10:00"))

    result = schedule.add(make_event("09:00", "09:15"))

    assert not result.ok
    assert result.rejection.reason is RejectReason.DURATION_OUT_OF_RANGE
    assert len(schedule.events) == 1


def test_add_rejects_invalid_fields_before_rules() -> None:
    schedule = WeekSchedule(MONDAY)

    # also on a Sunday, but the field check comes first
    result = schedule.add(make_event("10:00", "10:05", day=21, name=""))

    assert result.rejection.reason is RejectReason.INVALID_FIELD
    assert schedule.events == ()


def test_add_excessive_overlap_reports_conflict() -> None:
    schedule = WeekSchedule(MONDAY)
    first = schedule.add(make_event("09:00", "10:00")).event_id

    result = schedule.add(make_event("09:15", "10:15", name="Review"))

    assert result.rejection.reason is RejectReason.EXCESSIVE_OVERLAP
    assert result.rejection.conflicting_event_id == first
    assert schedule.add(make_event("09:50", "10:50", name="Review")).ok


def test_add_ignores_caller_supplied_identifier() -> None:
    schedule = WeekSchedule(MONDAY)
    first = schedule.add(make_event("09:00", "10:00")).event_id

    result = schedule.add(make_event("09:00", "10:00", event_id=first))

    assert result.rejection.reason is RejectReason.EXCESSIVE_OVERLAP


def test_update_name_does_not_conflict_with_itself() -> None:
    schedule = WeekSchedule(MONDAY)
    event_id = schedule.add(make_event("09:00", "10:00")).event_id

    result = schedule.update(event_id, name="Daily standup")

    assert result.ok
    assert result.event_id == event_id
    assert schedule.get(event_id).name == "Daily standup"
    assert len(schedule.events) == 1


def test_update_preserves_identity_and_position() -> None:
    schedule = WeekSchedule(MONDAY)
    first = schedule.add(make_event("09:00", "10:00")).event_id
    second = schedule.add(make_event("13:00", "14:00", name="Lunch")).event_id

    result = schedule.update(first, start=at(16, "11:00"), end=at(16, "12:00"), color=EventColor.RED)

    assert result.ok
    assert [event.event_id for event in schedule.events] == [first, second]
    updated = schedule.get(first)
    assert updated.start == at(16, "11:00")
    assert updated.color is EventColor.RED


def test_rejected_update_keeps_previous_version() -> None:
    schedule = WeekSchedule(MONDAY)
    first = schedule.add(make_event("09:00", "10:00")).event_id
    second = schedule.add(make_event("13:00", "14:00", name="Lunch")).event_id

    result = schedule.update(second, start=at(16, "09:00"), end=at(16, "10:00"))

    assert result.rejection.reason is RejectReason.EXCESSIVE_OVERLAP
    assert result.rejection.conflicting_event_id == first
    assert schedule.get(second).start == at(16, "13:00")


def test_update_validates_fields() -> None:
    schedule = WeekSchedule(MONDAY)
    event_id = schedule.add(make_event("09:00", "10:00")).event_id

    result = schedule.update(event_id, location="z" * 40)

    assert result.rejection.reason is RejectReason.INVALID_FIELD
    assert schedule.get(event_id).location == "Room A"


def test_update_unknown_event_is_not_found() -> None:
    schedule = WeekSchedule(MONDAY)

    result = schedule.update("missing", name="x")

    assert result.rejection.reason is RejectReason.NOT_FOUND


def test_update_rejects_unknown_fields() -> None:
    schedule = WeekSchedule(MONDAY)
    event_id = schedule.add(make_event("09:00", "10:00")).event_id

    with pytest.raises(TypeError, match="event_id"):
        schedule.update(event_id, event_id="other")


def test_remove_deletes_only_matching_event() -> None:
    schedule = WeekSchedule(MONDAY)
    tuesday = schedule.add(make_event("09:00", "10:00")).event_id
    wednesday = schedule.add(make_event("09:00", "10:00", day=17)).event_id

    assert schedule.remove(tuesday).ok
    assert [event.event_id for event in schedule.events] == [wednesday]
    assert schedule.remove(tuesday).rejection.reason is RejectReason.NOT_FOUND


def test_events_on_is_chronological() -> None:
    schedule = WeekSchedule(MONDAY)
    schedule.add(make_event("15:00", "16:00", name="Late"))
    schedule.add(make_event("09:00", "10:00", name="Early"))
    schedule.add(make_event("09:00", "10:00", day=17, name="Other day"))

    names = [event.name for event in schedule.events_on(date(2024, 1, 16))]

    assert names == ["Early", "Late"]


def test_events_in_week_excludes_other_weeks() -> None:
    schedule = WeekSchedule(
        MONDAY,
        [
            make_event("09:00", "10:00", day=15, name="Monday"),
            make_event("09:00", "10:00", day=20, name="Saturday"),
            make_event("09:00", "10:00", day=22, name="Next Monday"),
            make_event("09:00", "10:00", day=12, name="Last Friday"),
        ],
    )

    names = [event.name for event in schedule.events_in_week()]

    assert names == ["Monday", "Saturday"]


def test_loaded_events_receive_identifiers() -> None:
    schedule = WeekSchedule(MONDAY, [make_event("09:00", "10:00"), make_event("11:00", "12:00")])

    ids = [event.event_id for event in schedule.events]

    assert all(ids)
    assert len(set(ids)) == 2


def test_duplicate_identifiers_are_refused() -> None:
    with pytest.raises(ValueError, match="Duplicate event id 'dup'"):
        WeekSchedule(
            MONDAY,
            [
                make_event("09:00", "10:00", event_id="dup"),
                make_event("12:00", "13:00", event_id="dup"),
            ],
        )


def test_events_snapshot_is_immutable() -> None:
    schedule = WeekSchedule(MONDAY)
    schedule.add(make_event("09:00", "10:00"))

    snapshot = schedule.events

    assert isinstance(snapshot, tuple)
    schedule.add(make_event("11:00", "12:00"))
    assert len(snapshot) == 1


def test_week_days() -> None:
    schedule = WeekSchedule(MONDAY)

    days = schedule.week_days()

    assert days[0] == MONDAY
    assert days[-1] == date(2024, 1, 21)
    assert schedule.contains_date(date(2024, 1, 21))
    assert not schedule.contains_date(date(2024, 1, 22))


def test_anchor_must_be_monday() -> None:
    with pytest.raises(ValueError, match="not a Monday"):
        WeekSchedule(date(2024, 1, 16))
