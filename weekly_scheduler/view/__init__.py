"""Presentation adapters for the week schedule."""
from __future__ import annotations

from .base import ScheduleView
from .png import PngScheduleView

__all__ = [
    "PngScheduleView",
    "ScheduleView",
]
