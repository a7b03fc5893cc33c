"""Abstract presentation interface used by the application."""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from PIL import Image

from ..calendar.hit_test import ClickTarget
from ..calendar.schedule import WeekSchedule


class ScheduleView(ABC):
    """Defines what any front end for the week schedule must provide."""

    @property
    @abstractmethod
    def resolution(self) -> tuple[int, int]:
        """Return the (width, height) of the rendered view in pixels."""

    @abstractmethod
    def render(self, schedule: WeekSchedule, now: datetime | None = None) -> Image.Image:
        """Draw the current state of ``schedule``."""

    @abstractmethod
    def handle_click(self, schedule: WeekSchedule, x: int, y: int) -> ClickTarget:
        """Translate a click on the rendered view into what it points at."""
