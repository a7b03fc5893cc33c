#!/usr/bin/env python3
"""Generate a sample week-grid preview PNG from a seeded schedule."""

from __future__ import annotations

import argparse
from datetime import date, datetime, time, timedelta
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from weekly_scheduler.calendar import Event, EventColor, WeekSchedule
from weekly_scheduler.rendering import WeekRenderer


PREVIEWS_DIR = Path(__file__).resolve().parents[1] / "previews"
DEFAULT_PNG_OUTPUT = PREVIEWS_DIR / "week_sample.png"

SAMPLE_EVENTS = [
    (0, "09:00", "10:00", "Standup", "Room A", EventColor.BLUE),
    (0, "13:00", "15:30", "Board prep", "Office", EventColor.ORANGE),
    (1, "09:30", "11:00", "Hiring loop", "Room C", EventColor.GREEN),
    (1, "10:40", "12:00", "Vendor call", "Zoom", EventColor.YELLOW),
    (3, "16:00", "19:00", "Quarterly review", "Boardroom", EventColor.RED),
    (5, "09:00", "11:00", "Site visit", "Plant 2", EventColor.GRAY),
]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Where to write the preview file (defaults to previews/week_sample.png).",
    )
    parser.add_argument(
        "--monday",
        type=date.fromisoformat,
        default=date(2024, 1, 15),
        help="Monday the sample week is anchored at.",
    )
    return parser.parse_args()


def build_sample(monday: date) -> WeekSchedule:
    schedule = WeekSchedule(monday)
    for offset, start, end, name, location, color in SAMPLE_EVENTS:
        day = monday + timedelta(days=offset)
        result = schedule.add(
            Event(
                name=name,
                location=location,
                start=datetime.combine(day, time.fromisoformat(start)),
                end=datetime.combine(day, time.fromisoformat(end)),
                color=color,
            )
        )
        if not result.ok:
            print(f"Skipped {name}: {result.rejection.message}")
    return schedule


def main() -> None:
    args = parse_args()
    output_path = args.output or DEFAULT_PNG_OUTPUT
    output_path.parent.mkdir(parents=True, exist_ok=True)

    schedule = build_sample(args.monday)
    now = datetime.combine(args.monday + timedelta(days=1), time(11, 15))
    image = WeekRenderer().render_week(schedule, now)
    image.save(output_path)

    print(f"Wrote preview to {output_path}")


if __name__ == "__main__":
    main()
