"""Command-line interface for solar event times."""

from __future__ import annotations

import argparse
import logging
import random
import sys
import time
from datetime import date, datetime, timedelta
from typing import Callable

from sun_times.astronomy.calculator import SolarPositionEngine, resolve_timezone
from sun_times.config import Settings, get_settings
from sun_times.exceptions import SunTimesError
from sun_times.models.events import SunEvent
from sun_times.models.location import Coordinates

logger = logging.getLogger(__name__)

# Accessors timed by `sun-times bench`, in the order they are reported
BENCHMARKED_METHODS = {
    "sunrise": "sunrise_or_none",
    "sunset": "sunset_or_none",
    "solar_noon": "solar_noon",
    "civil_dawn": "civil_dawn_or_none",
    "civil_dusk": "civil_dusk_or_none",
    "nautical_dawn": "nautical_dawn_or_none",
    "nautical_dusk": "nautical_dusk_or_none",
    "astronomical_dawn": "astronomical_dawn_or_none",
    "astronomical_dusk": "astronomical_dusk_or_none",
    "daylight_length": "daylight_length",
    "events (all)": "events",
}


def format_time(value: datetime | None) -> str:
    """Format an instant for display, or N/A when the event does not occur."""
    return value.isoformat(sep=" ", timespec="seconds") if value else "N/A"


def format_duration(span: timedelta) -> str:
    """Format a duration as '9h 50m 12s'."""
    total = int(span.total_seconds())
    days, rest = divmod(total, 86_400)
    hours, rest = divmod(rest, 3_600)
    minutes, seconds = divmod(rest, 60)

    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    parts.append(f"{seconds}s")
    return " ".join(parts)


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid date: '{value}'. Expected format: YYYY-MM-DD"
        ) from None


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid integer: '{value}'") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"Must be at least 1, got {number}")
    return number


def _random_date(rng: random.Random) -> date:
    # Day capped at 28 so every month is valid
    return date(rng.randint(2020, 2030), rng.randint(1, 12), rng.randint(1, 28))


def _random_call(rng: random.Random, method: str) -> Callable[[], object]:
    def call() -> object:
        engine = SolarPositionEngine(rng.uniform(-90.0, 90.0), rng.uniform(-180.0, 180.0))
        return getattr(engine, method)(_random_date(rng))

    return call


def _time_calls(call: Callable[[], object], iterations: int) -> float:
    start = time.perf_counter()
    for _ in range(iterations):
        call()
    return max(time.perf_counter() - start, 1e-9)


def cmd_events(args: argparse.Namespace, settings: Settings) -> int:
    """Print all solar events for a location and date."""
    engine = SolarPositionEngine(Coordinates.from_string(args.coordinates))
    tz = resolve_timezone(args.tz or settings.default_timezone)
    now = datetime.now(tz)
    day = args.date or now.date()

    events = engine.events(day, tz)
    if args.json:
        print(events.model_dump_json(indent=2))
        return 0

    print(f"Location: {engine.latitude}, {engine.longitude}")
    print(f"Timezone: {tz}")
    print(f"Date:     {day.isoformat()}")
    print()
    print("=== Twilight Periods ===")
    for event in SunEvent:
        label = f"{event.label.capitalize()}:"
        print(f"{label:<20} {format_time(events.get(event))}")
    print()
    print("=== Daylight ===")
    print(f"Daylight:      {format_duration(engine.daylight_length(day))}")

    if day == now.date():
        remaining = engine.daylight_remaining(now, tz)
        if remaining is not None:
            print(f"Daylight left: {format_duration(remaining)}")
    return 0


def cmd_bench(args: argparse.Namespace, settings: Settings) -> int:
    """Time every accessor over random locations and dates."""
    iterations = args.iterations or settings.benchmark_iterations
    seed = args.seed if args.seed is not None else settings.benchmark_seed
    rng = random.Random(seed)

    print(f"{settings.app_name} benchmark")
    print("=" * 50)
    print("Using random locations (latitude: -90..90, longitude: -180..180)")
    print("Using random dates (2020-2030)")
    print(f"Iterations: {iterations}")
    print("=" * 50)
    print()

    for name, method in BENCHMARKED_METHODS.items():
        elapsed = _time_calls(_random_call(rng, method), iterations)
        print(
            f"{name:<25} {elapsed / iterations * 1000:8.4f} ms/op  "
            f"{iterations / elapsed:12.0f} ops/s"
        )

    def combined() -> None:
        engine = SolarPositionEngine(rng.uniform(-90.0, 90.0), rng.uniform(-180.0, 180.0))
        day = _random_date(rng)
        engine.sunrise_or_none(day)
        engine.sunset_or_none(day)
        engine.solar_noon(day)

    elapsed = _time_calls(combined, iterations)
    calculations = iterations * 3
    print()
    print("=" * 50)
    print(f"Calculating sunrise, sunset, and solar_noon {iterations} times:")
    print(f"  Total time: {elapsed:.4f}s")
    print(f"  Average per calculation: {elapsed / calculations * 1000:.4f}ms")
    print(f"  Calculations per second: {calculations / elapsed:.0f}")
    return 0


def cmd_check(args: argparse.Namespace, settings: Settings) -> int:
    """Compare the engine with NOAA reference times (and optionally astropy)."""
    from sun_times.astronomy.accuracy import (
        REFERENCE_CASES,
        compare_with_reference,
        sun_altitude,
    )

    tolerance = timedelta(seconds=args.tolerance)
    failures = 0

    for case in REFERENCE_CASES:
        comparison = compare_with_reference(case)
        print(f"Location: {case.name}")
        print(f"Date:     {case.date.isoformat()}")
        print(f"Timezone: {case.timezone}")

        for event, calculated in comparison.calculated.items():
            reference = getattr(case, event.value)
            diff = comparison.difference(event)
            print()
            print(f"Calculated {event.label + ':':<12} {calculated:%H:%M:%S}")
            print(f"Reference  {event.label + ':':<12} {reference:%H:%M:%S}")
            print(f"Difference: {int(diff.total_seconds())} seconds")
            if args.astropy and event.altitude is not None:
                altitude = sun_altitude(case.coordinates, calculated)
                print(
                    f"Sun altitude (astropy): {altitude:.3f}° "
                    f"(target {float(event.altitude):.4f}°)"
                )

        if comparison.max_difference > tolerance:
            logger.warning(f"{case.name}: difference exceeds {args.tolerance}s")
            failures += 1
        print("=" * 80)
        print()

    return 1 if failures else 0


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    """Build the argument parser with defaults taken from settings."""
    parser = argparse.ArgumentParser(
        prog="sun-times",
        description="Sunrise, sunset, solar noon and twilight times for any location",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {settings.app_version}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Events command
    events_parser = subparsers.add_parser(
        "events", help="Show all solar events for a location and date"
    )
    events_parser.add_argument(
        "coordinates",
        help="Location as lat,lon (e.g. 48.87,2.67); put -- before a negative latitude",
    )
    events_parser.add_argument(
        "--date",
        type=_parse_date,
        default=None,
        help="Date as YYYY-MM-DD (default: today)",
    )
    events_parser.add_argument(
        "--tz",
        default=None,
        help=f"IANA timezone for output (default: {settings.default_timezone})",
    )
    events_parser.add_argument(
        "--json", action="store_true", help="Print events as JSON"
    )
    events_parser.set_defaults(handler=cmd_events)

    # Bench command
    bench_parser = subparsers.add_parser(
        "bench", help="Benchmark calculations over random locations and dates"
    )
    bench_parser.add_argument(
        "--iterations",
        type=_positive_int,
        default=None,
        help=f"Iterations per accessor (default: {settings.benchmark_iterations})",
    )
    bench_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    bench_parser.set_defaults(handler=cmd_bench)

    # Check command
    check_parser = subparsers.add_parser(
        "check", help="Compare results with NOAA reference times"
    )
    check_parser.add_argument(
        "--tolerance",
        type=float,
        default=120.0,
        help="Maximum accepted difference in seconds (default: 120)",
    )
    check_parser.add_argument(
        "--astropy",
        action="store_true",
        help="Also report astropy's sun altitude at each calculated time",
    )
    check_parser.set_defaults(handler=cmd_check)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    try:
        settings = get_settings()
    except ValueError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1

    parser = build_parser(settings)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    try:
        return args.handler(args, settings)
    except (ValueError, SunTimesError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
