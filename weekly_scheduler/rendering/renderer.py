"""Renderer for composing the week-view calendar image."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Sequence

from PIL import Image, ImageDraw, ImageFont

from ..calendar.models import RGB, Event
from ..calendar.schedule import WeekSchedule
from ..calendar.validation import business_hours
from .layout import DEFAULT_LAYOUT, GridLayout


def _font_length(font: ImageFont.ImageFont, text: str) -> float:
    try:
        return font.getlength(text)  # type: ignore[attr-defined]
    except AttributeError:  # pragma: no cover - fallback for older Pillow
        dummy_img = Image.new("L", (1, 1), color=255)
        draw = ImageDraw.Draw(dummy_img)
        return float(draw.textlength(text, font=font))


def _load_font(path_candidates: Sequence[Path], size: int) -> ImageFont.ImageFont:
    for candidate in path_candidates:
        if candidate and candidate.exists():
            return ImageFont.truetype(str(candidate), size=size)
    return ImageFont.load_default()


def _default_font_candidates(bold: bool) -> List[Path]:
    names = [
        "DejaVuSans-Bold.ttf" if bold else "DejaVuSans.ttf",
        "Arial Bold.ttf" if bold else "Arial.ttf",
    ]
    candidates: List[Path] = []
    search_dirs = [
        Path("/usr/share/fonts/truetype/dejavu"),
        Path("/usr/share/fonts"),
        Path("/Library/Fonts"),
        Path.home() / ".fonts",
    ]
    for name in names:
        for directory in search_dirs:
            candidates.append(directory / name)
    return candidates


def _darker(color: RGB, factor: float = 0.7) -> RGB:
    return tuple(int(channel * factor) for channel in color)  # type: ignore[return-value]


def format_event_line(event: Event) -> str:
    """Single-line listing used by the daily view."""

    return f"{event.start:%H:%M}-{event.end:%H:%M}: {event.name} ({event.location})"


@dataclass
class RendererConfig:
    """Colours, fonts and preview output for the week renderer."""

    layout: GridLayout = DEFAULT_LAYOUT
    font_regular_path: Path | None = None
    font_bold_path: Path | None = None
    preview_output_dir: Path | None = None
    background_color: RGB = (255, 255, 255)
    header_color: RGB = (240, 240, 240)
    foreground_color: RGB = (0, 0, 0)
    grid_color: RGB = (200, 200, 200)
    weekend_color: RGB = (255, 240, 240)
    now_line_color: RGB = (255, 0, 0)
    now_line_thickness: int = 2
    header_font_size: int = 12
    time_label_font_size: int = 10
    event_font_size: int = 11
    event_corner_radius: int = 5

    def __post_init__(self) -> None:
        if self.preview_output_dir is not None:
            self.preview_output_dir = Path(self.preview_output_dir)
            self.preview_output_dir.mkdir(parents=True, exist_ok=True)

    def _font_candidates(self, bold: bool) -> List[Path]:
        provided = self.font_bold_path if bold else self.font_regular_path
        candidates: List[Path] = []
        if provided is not None:
            candidates.append(Path(provided))
        candidates.extend(_default_font_candidates(bold))
        return candidates

    def font(self, size: int, *, bold: bool = False) -> ImageFont.ImageFont:
        return _load_font(self._font_candidates(bold), size)


class WeekRenderer:
    """Compose the seven-day grid image for a :class:`WeekSchedule`."""

    def __init__(self, config: RendererConfig | None = None) -> None:
        self.config = config or RendererConfig()

    @property
    def layout(self) -> GridLayout:
        return self.config.layout

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def render_week(
        self,
        schedule: WeekSchedule,
        now: datetime | None = None,
        *,
        preview_name: str | None = None,
    ) -> Image.Image:
        """Render the week anchored at ``schedule.anchor_monday``.

        Args:
            schedule: Schedule whose in-week events are drawn.
            now: Timestamp for the current-time line; omitted when None.
            preview_name: Optional name for the preview PNG when preview mode
                is enabled.
        Returns:
            An RGB Pillow image sized to the layout canvas.
        """

        cfg = self.config
        layout = self.layout
        image = Image.new(
            "RGB",
            (layout.canvas_width, layout.canvas_height),
            color=cfg.background_color,
        )
        draw = ImageDraw.Draw(image)

        self._draw_header(draw, schedule)
        self._draw_weekend_shading(draw, schedule)
        self._draw_hour_grid(draw)
        self._draw_events(draw, schedule)
        if now is not None:
            self._draw_current_time(draw, schedule, now)

        if cfg.preview_output_dir is not None:
            name = preview_name or schedule.anchor_monday.strftime("week-%Y%m%d")
            image.save(cfg.preview_output_dir / f"{name}.png")

        return image

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------
    def _draw_header(self, draw: ImageDraw.ImageDraw, schedule: WeekSchedule) -> None:
        cfg = self.config
        layout = self.layout
        font = cfg.font(cfg.header_font_size, bold=True)

        draw.rectangle((0, 0, layout.canvas_width - 1, layout.header_height), fill=cfg.header_color)
        for index, day in enumerate(schedule.week_days()):
            x = layout.column_left(index)
            draw.text((x + 5, 8), day.strftime("%a"), font=font, fill=cfg.foreground_color)
            draw.text((x + 5, 28), day.strftime("%m/%d"), font=font, fill=cfg.foreground_color)
            draw.line((x, 0, x, layout.canvas_height), fill=cfg.foreground_color, width=1)
        right = layout.canvas_width - 1
        draw.line((right, 0, right, layout.canvas_height), fill=cfg.foreground_color, width=1)

    def _draw_weekend_shading(self, draw: ImageDraw.ImageDraw, schedule: WeekSchedule) -> None:
        cfg = self.config
        layout = self.layout
        for index, day in enumerate(schedule.week_days()):
            if day.isoweekday() < 6:
                continue
            left = layout.column_left(index) + 1
            draw.rectangle(
                (left, layout.grid_top + 1, left + layout.column_width - 2, layout.grid_bottom),
                fill=cfg.weekend_color,
            )

    def _draw_hour_grid(self, draw: ImageDraw.ImageDraw) -> None:
        cfg = self.config
        layout = self.layout
        label_font = cfg.font(cfg.time_label_font_size)
        grid_left = layout.time_column_width
        grid_right = layout.canvas_width

        for hour in range(layout.start_hour, layout.end_hour + 1):
            _, y = layout.time_to_point(0, hour, 0)
            draw.line((grid_left, y, grid_right, y), fill=cfg.grid_color, width=1)
            if hour < layout.end_hour:
                _, half_y = layout.time_to_point(0, hour, 30)
                draw.line((grid_left, half_y, grid_right, half_y), fill=cfg.grid_color, width=1)
            label_y = max(y - label_font.size - 2, layout.grid_top)
            draw.text((5, label_y), f"{hour:02d}:00", font=label_font, fill=cfg.foreground_color)

    def _draw_events(self, draw: ImageDraw.ImageDraw, schedule: WeekSchedule) -> None:
        cfg = self.config
        layout = self.layout
        font = cfg.font(cfg.event_font_size, bold=True)

        for event in schedule.events_in_week():
            box = layout.event_box(event.start, event.end, schedule.anchor_monday)
            if box is None:
                continue
            fill = event.color.rgb
            draw.rounded_rectangle(
                box,
                radius=cfg.event_corner_radius,
                fill=fill,
                outline=_darker(fill),
                width=1,
            )
            left, top, right, bottom = box
            max_width = right - left - 10
            lines = [f"{event.start:%H:%M}-{event.end:%H:%M}", event.name]
            y = top + 3
            for line in lines:
                if y + font.size > bottom:
                    break
                draw.text(
                    (left + 5, y),
                    self._truncate_line(line, font, max_width),
                    font=font,
                    fill=cfg.foreground_color,
                )
                y += font.size + 3

    def _truncate_line(self, line: str, font: ImageFont.ImageFont, max_width: int) -> str:
        if _font_length(font, line) <= max_width:
            return line
        ellipsis = "…"
        current = line
        while current and _font_length(font, current + ellipsis) > max_width:
            current = current[:-1].rstrip()
        return (current + ellipsis) if current else ellipsis

    def _draw_current_time(self, draw: ImageDraw.ImageDraw, schedule: WeekSchedule, now: datetime) -> None:
        cfg = self.config
        layout = self.layout
        if not schedule.contains_date(now.date()):
            return
        band = business_hours(now.isoweekday())
        if band is None or not band[0] <= now.hour < band[1]:
            return
        if not layout.start_hour <= now.hour < layout.end_hour:
            return

        day = (now.date() - schedule.anchor_monday).days
        _, y = layout.time_to_point(day, now.hour, now.minute)
        # dashed line across every day column
        left = layout.column_left(0)
        right = layout.canvas_width
        dash = 5
        for start_x in range(left, right, dash * 2):
            end_x = min(start_x + dash, right)
            draw.line((start_x, y, end_x, y), fill=cfg.now_line_color, width=cfg.now_line_thickness)


__all__ = ["RendererConfig", "WeekRenderer", "format_event_line"]
