"""Week-grid geometry and Pillow rendering."""

from .layout import DEFAULT_LAYOUT, GridLayout, GridTime
from .renderer import RendererConfig, WeekRenderer, format_event_line

__all__ = [
    "DEFAULT_LAYOUT",
    "GridLayout",
    "GridTime",
    "RendererConfig",
    "WeekRenderer",
    "format_event_line",
]
