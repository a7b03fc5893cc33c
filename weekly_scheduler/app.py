"""Command line entry point for the weekly scheduler."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from pathlib import Path
from typing import Callable, Iterable, Optional, TextIO

from .calendar import (
    Event,
    EventColor,
    Rejection,
    ScheduleResult,
    ScheduleStateError,
    WeekSchedule,
    business_hours_label,
    load_schedule,
    save_schedule,
)
from .config import load_env_file, resolve_schedule_file
from .rendering import format_event_line
from .view import PngScheduleView, ScheduleView

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_USAGE = 2
DEFAULT_RENDER_OUTPUT = Path("week.png")


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD") from exc


def _parse_clock(value: str) -> time:
    try:
        return time.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid time {value!r}, expected HH:MM") from exc


def _parse_datetime(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid timestamp {value!r}, expected YYYY-MM-DDTHH:MM") from exc


def _parse_color(value: str) -> EventColor:
    try:
        return EventColor.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _add_event_fields(parser: argparse.ArgumentParser, *, required: bool) -> None:
    parser.add_argument("--name", required=required, help="Event name (1-32 characters).")
    parser.add_argument("--location", required=required, help="Event location (1-32 characters).")
    parser.add_argument("--date", type=_parse_date, required=required, help="Event date (YYYY-MM-DD).")
    parser.add_argument("--start", type=_parse_clock, required=required, help="Start time (HH:MM).")
    parser.add_argument("--end", type=_parse_clock, required=required, help="End time (HH:MM).")
    parser.add_argument(
        "--color",
        type=_parse_color,
        default=EventColor.BLUE if required else None,
        help=f"One of: {', '.join(color.value for color in EventColor)}.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Single-user weekly scheduler")
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Optional path to a .env file loaded before the app starts.",
    )
    parser.add_argument(
        "--schedule-file",
        type=Path,
        default=None,
        help="Schedule JSON file (defaults to $WEEKLY_SCHEDULER_FILE or ./schedule.json).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    commands = parser.add_subparsers(dest="command", required=True)

    init = commands.add_parser("init", help="Start a new schedule anchored at a Monday.")
    init.add_argument("monday", type=_parse_date, help="Monday's date (YYYY-MM-DD).")
    init.add_argument("--force", action="store_true", help="Overwrite an existing schedule.")

    add = commands.add_parser("add", help="Add a new event.")
    _add_event_fields(add, required=True)

    edit = commands.add_parser("edit", help="Edit an existing event.")
    edit.add_argument("event_id")
    _add_event_fields(edit, required=False)

    remove = commands.add_parser("remove", help="Delete an event.")
    remove.add_argument("event_id")

    day = commands.add_parser("day", help="List the events of one day.")
    day.add_argument("date", type=_parse_date)

    commands.add_parser("week", help="List the events of the anchored week.")

    render = commands.add_parser("render", help="Render the week grid to a PNG file.")
    render.add_argument("--output", type=Path, default=DEFAULT_RENDER_OUTPUT)
    render.add_argument(
        "--now",
        type=_parse_datetime,
        default=None,
        help="Timestamp for the current-time line (defaults to the local clock).",
    )

    click = commands.add_parser("click", help="Report what a click on the rendered grid hits.")
    click.add_argument("x", type=int)
    click.add_argument("y", type=int)

    return parser


@dataclass
class AppSettings:
    command: str
    schedule_file: Path
    verbose: bool


class SchedulerApp:
    """Owns the loaded schedule, persists it, and runs one command against it."""

    def __init__(
        self,
        *,
        settings: AppSettings,
        view_factory: Callable[[], ScheduleView] = PngScheduleView,
        now_provider: Callable[[], datetime] = datetime.now,
        out: Optional[TextIO] = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.settings = settings
        self.view_factory = view_factory
        self.now_provider = now_provider
        self.out = out
        self.logger = logger or LOGGER
        self._schedule: WeekSchedule | None = None

    @property
    def schedule(self) -> WeekSchedule:
        if self._schedule is None:
            raise RuntimeError("Schedule has not been loaded")
        return self._schedule

    def load(self) -> None:
        """Load persisted state.

        Raises:
            ScheduleStateError: when the file is missing or malformed.
        """

        schedule = load_schedule(self.settings.schedule_file)
        if schedule is None:
            raise ScheduleStateError(
                f"No schedule found at {str(self.settings.schedule_file)!r}; run 'init MONDAY' first"
            )
        self._schedule = schedule

    def seed(self, monday: date, *, force: bool = False) -> None:
        path = self.settings.schedule_file
        if path.exists() and not force:
            raise ScheduleStateError(f"Schedule already exists at {str(path)!r}; use --force to replace it")
        try:
            self._schedule = WeekSchedule(monday)
        except ValueError as exc:
            raise ScheduleStateError(str(exc)) from exc
        self.save()
        self.logger.info("Initialized schedule for week of %s", monday.isoformat())

    def save(self) -> None:
        save_schedule(self.schedule, self.settings.schedule_file)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def add(self, args: argparse.Namespace) -> int:
        candidate = Event(
            name=args.name.strip(),
            location=args.location.strip(),
            start=datetime.combine(args.date, args.start),
            end=datetime.combine(args.date, args.end),
            color=args.color,
        )
        result = self.schedule.add(candidate)
        if result.ok:
            self._print(f"Added {result.event_id}")
        return self._finish(result)

    def edit(self, args: argparse.Namespace) -> int:
        current = self.schedule.get(args.event_id)
        if current is None:
            return self._finish(self.schedule.update(args.event_id))

        changes: dict[str, object] = {}
        if args.name is not None:
            changes["name"] = args.name.strip()
        if args.location is not None:
            changes["location"] = args.location.strip()
        if args.color is not None:
            changes["color"] = args.color
        day = args.date or current.start.date()
        if args.date is not None or args.start is not None:
            changes["start"] = datetime.combine(day, args.start or current.start.time())
        if args.date is not None or args.end is not None:
            changes["end"] = datetime.combine(day, args.end or current.end.time())

        result = self.schedule.update(args.event_id, **changes)
        if result.ok:
            self._print(f"Updated {result.event_id}")
        return self._finish(result)

    def remove(self, args: argparse.Namespace) -> int:
        result = self.schedule.remove(args.event_id)
        if result.ok:
            self._print(f"Removed {result.event_id}")
        return self._finish(result)

    def list_day(self, day: date) -> int:
        self._print(f"{day:%A, %B} {day.day}, {day.year}")
        self._print(business_hours_label(day))
        for event in self.schedule.events_on(day):
            self._print(f"  {format_event_line(event)} [{event.color.value}] {event.event_id}")
        return EXIT_OK

    def list_week(self) -> int:
        schedule = self.schedule
        self._print(f"Week of {schedule.anchor_monday.isoformat()}")
        for event in schedule.events_in_week():
            self._print(f"  {event.start:%a %m/%d} {format_event_line(event)} {event.event_id}")
        return EXIT_OK

    def render(self, output: Path, now: datetime | None) -> int:
        view = self.view_factory()
        image = view.render(self.schedule, now or self.now_provider())
        output.parent.mkdir(parents=True, exist_ok=True)
        image.save(output)
        self._print(f"Wrote week grid to {output}")
        return EXIT_OK

    def click(self, x: int, y: int) -> int:
        target = self.view_factory().handle_click(self.schedule, x, y)
        if target.day is not None:
            return self.list_day(target.day)
        if target.event is not None:
            event = target.event
            self._print(f"{event.event_id}: {format_event_line(event)} [{event.color.value}]")
            return EXIT_OK
        self._print("Nothing at that position")
        return EXIT_OK

    def run(self, args: argparse.Namespace) -> int:
        command = self.settings.command
        if command == "init":
            self.seed(args.monday, force=args.force)
            return EXIT_OK

        self.load()
        handlers: dict[str, Callable[[], int]] = {
            "add": lambda: self.add(args),
            "edit": lambda: self.edit(args),
            "remove": lambda: self.remove(args),
            "day": lambda: self.list_day(args.date),
            "week": self.list_week,
            "render": lambda: self.render(args.output, args.now),
            "click": lambda: self.click(args.x, args.y),
        }
        return handlers[command]()

    # ------------------------------------------------------------------
    def _finish(self, result: ScheduleResult) -> int:
        if result.ok:
            self.save()
            return EXIT_OK
        self._report(result.rejection)
        return EXIT_REJECTED

    def _report(self, rejection: Rejection | None) -> None:
        if rejection is None:
            return
        message = rejection.message
        if rejection.conflicting_event_id is not None:
            message += f" (overlaps {rejection.conflicting_event_id} by {rejection.overlap_minutes} minutes)"
        self._print(f"Rejected: {message}")

    def _print(self, text: str) -> None:
        print(text, file=self.out)


def resolve_settings(args: argparse.Namespace) -> AppSettings:
    load_env_file(args.env_file)
    return AppSettings(
        command=args.command,
        schedule_file=resolve_schedule_file(args.schedule_file),
        verbose=args.verbose,
    )


def main(
    argv: Optional[Iterable[str]] = None,
    *,
    view_factory: Callable[[], ScheduleView] = PngScheduleView,
    now_provider: Callable[[], datetime] = datetime.now,
    out: Optional[TextIO] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    settings = resolve_settings(args)
    app = SchedulerApp(
        settings=settings,
        view_factory=view_factory,
        now_provider=now_provider,
        out=out,
    )

    try:
        return app.run(args)
    except ScheduleStateError as exc:
        LOGGER.error("%s", exc)
        return EXIT_USAGE


if __name__ == "__main__":
    raise SystemExit(main())
