"""Grid geometry for the week view: calendar time <-> pixel coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Final, NamedTuple, Optional

MINUTES_PER_HOUR = 60


class GridTime(NamedTuple):
    """A point on the grid in calendar terms; ``day`` is 0 for Monday."""

    day: int
    hour: int
    minute: int

    def on_week(self, monday: date) -> datetime:
        return datetime.combine(monday + timedelta(days=self.day), time(self.hour, self.minute))


@dataclass(frozen=True)
class GridLayout:
    """Seven day columns by twelve hour rows, with a header band and a time column.

    ``row_height`` must give every minute at least one pixel row so that
    :meth:`time_to_point` and :meth:`point_to_time` round-trip exactly.
    """

    time_column_width: int = 50
    header_height: int = 50
    column_width: int = 150
    row_height: int = 60
    start_hour: int = 8
    end_hour: int = 20
    days: int = 7
    event_inset: int = 5

    def __post_init__(self) -> None:
        if self.row_height < MINUTES_PER_HOUR:
            raise ValueError(
                f"row_height must be at least {MINUTES_PER_HOUR} pixels, got {self.row_height}"
            )
        if self.column_width <= 0:
            raise ValueError("column_width must be positive")
        if self.end_hour <= self.start_hour:
            raise ValueError("end_hour must be after start_hour")

    @property
    def hours_displayed(self) -> int:
        return self.end_hour - self.start_hour

    @property
    def canvas_width(self) -> int:
        return self.time_column_width + self.days * self.column_width

    @property
    def canvas_height(self) -> int:
        return self.header_height + self.hours_displayed * self.row_height

    @property
    def grid_top(self) -> int:
        return self.header_height

    @property
    def grid_bottom(self) -> int:
        return self.canvas_height

    def column_left(self, day: int) -> int:
        return self.time_column_width + day * self.column_width

    def time_to_point(self, day: int, hour: int, minute: int) -> tuple[int, int]:
        """Return the top-left pixel of the cell slice for ``day`` at ``hour:minute``.

        The y value is the first pixel row belonging to that minute. Hours
        outside the rendered band are mapped by the same formula; clipping is
        up to the caller.
        """

        x = self.column_left(day)
        # ceil(minute * row_height / 60) without floats
        minute_offset = -(-minute * self.row_height // MINUTES_PER_HOUR)
        y = self.header_height + (hour - self.start_hour) * self.row_height + minute_offset
        return x, y

    def point_to_time(self, x: int, y: int) -> Optional[GridTime]:
        """Map a pixel to the grid time containing it.

        Returns None for points in the header band or the time column. Points
        right of the last column snap to the last day; points below the band
        map to hours past ``end_hour``.
        """

        dx = int(x) - self.time_column_width
        dy = int(y) - self.header_height
        if dx < 0 or dy < 0:
            return None
        day = min(dx // self.column_width, self.days - 1)
        elapsed = dy * MINUTES_PER_HOUR // self.row_height
        hour, minute = divmod(elapsed, MINUTES_PER_HOUR)
        return GridTime(day, self.start_hour + hour, minute)

    def in_band(self, moment: GridTime) -> bool:
        return self.start_hour <= moment.hour < self.end_hour

    def header_day_at(self, x: int, y: int) -> Optional[int]:
        """Return the day column under a click in the header band."""

        if not 0 <= y < self.header_height or x < self.time_column_width:
            return None
        day = (int(x) - self.time_column_width) // self.column_width
        if day >= self.days:
            return None
        return day

    def y_for_time(self, value: datetime | time) -> int:
        """Vertical position of ``value`` clamped to the rendered band."""

        minutes = value.hour * MINUTES_PER_HOUR + value.minute
        lower = self.start_hour * MINUTES_PER_HOUR
        upper = self.end_hour * MINUTES_PER_HOUR
        clamped = max(lower, min(minutes, upper))
        hour, minute = divmod(clamped, MINUTES_PER_HOUR)
        return self.time_to_point(0, hour, minute)[1]

    def event_box(self, start: datetime, end: datetime, monday: date) -> Optional[tuple[int, int, int, int]]:
        """Bounding box for an event starting on a day of the week at ``monday``.

        Returns None when the event falls outside the week or entirely outside
        the rendered band.
        """

        day = (start.date() - monday).days
        if not 0 <= day < self.days:
            return None
        top = self.y_for_time(start)
        # an end on a later date runs to the bottom of the band
        bottom = self.y_for_time(end) if end.date() == start.date() else self.grid_bottom
        if bottom <= top:
            return None
        left = self.column_left(day) + self.event_inset
        right = self.column_left(day + 1) - self.event_inset
        return left, top, right, bottom


DEFAULT_LAYOUT: Final[GridLayout] = GridLayout()

__all__ = ["DEFAULT_LAYOUT", "GridLayout", "GridTime"]
