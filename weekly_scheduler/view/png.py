"""Headless view that renders the week to PNG frames."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from PIL import Image

from ..calendar.hit_test import ClickTarget, resolve_click
from ..calendar.schedule import WeekSchedule
from ..rendering.renderer import WeekRenderer
from .base import ScheduleView


@dataclass
class PngScheduleView(ScheduleView):
    """Render frames with :class:`WeekRenderer` and optionally write them to disk."""

    renderer: WeekRenderer = field(default_factory=WeekRenderer)
    output_dir: Optional[Path] = None
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))
    keep_history: bool = True

    def __post_init__(self) -> None:
        self._history: list[Image.Image] = []
        self._frames_rendered = 0
        if self.output_dir is not None:
            self.output_dir = Path(self.output_dir)
            self.output_dir.mkdir(parents=True, exist_ok=True)

    @property
    def resolution(self) -> tuple[int, int]:
        layout = self.renderer.layout
        return layout.canvas_width, layout.canvas_height

    def render(self, schedule: WeekSchedule, now: datetime | None = None) -> Image.Image:
        image = self.renderer.render_week(schedule, now)
        self._frames_rendered += 1
        if self.keep_history:
            self._history.append(image.copy())
        if self.output_dir is not None:
            output_path = self.output_dir / f"week-{schedule.anchor_monday:%Y%m%d}-{self._frames_rendered:03d}.png"
            image.save(output_path)
            self.logger.debug("Saved week frame to %s", output_path)
        return image

    def handle_click(self, schedule: WeekSchedule, x: int, y: int) -> ClickTarget:
        target = resolve_click(x, y, schedule, self.renderer.layout)
        if target.day is not None:
            self.logger.debug("Click (%d, %d) hit header for %s", x, y, target.day.isoformat())
        elif target.event is not None:
            self.logger.debug("Click (%d, %d) hit event %s", x, y, target.event.event_id)
        else:
            self.logger.debug("Click (%d, %d) hit nothing", x, y)
        return target

    @property
    def history(self) -> list[Image.Image]:
        """Return copies of the frames rendered so far (if enabled)."""

        return [frame.copy() for frame in self._history]
