"""Interval arithmetic for scheduled events."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class TimeSpan(Protocol):
    start: datetime
    end: datetime


def intervals_overlap(a: TimeSpan, b: TimeSpan) -> bool:
    """Return True when the closed intervals ``[a.start, a.end]`` and ``[b.start, b.end]`` meet.

    Touching endpoints count as an overlap so back-to-back events still go
    through the tolerance check in the validator.
    """

    return a.end >= b.start and b.end >= a.start


def overlap_minutes(a: TimeSpan, b: TimeSpan) -> int:
    """Return the number of whole minutes shared by ``a`` and ``b`` (never negative)."""

    shared_start = max(a.start, b.start)
    shared_end = min(a.end, b.end)
    seconds = (shared_end - shared_start).total_seconds()
    if seconds <= 0:
        return 0
    return int(seconds // 60)


__all__ = ["TimeSpan", "intervals_overlap", "overlap_minutes"]
