"""CLI helpers for inspecting live arrivals, route delays and departures."""

import asyncio
import json
import logging
import sys
from typing import Any

import aiohttp

from commute_timing.adapters.config import AppConfig
from commute_timing.domain.errors import ArrivalFetchError, CommuteTimingError
from commute_timing.main import build_engine, configure_logging, load_reference_data


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


async def show_arrivals(station_name: str, format_json: bool = False) -> None:
    """Print live arrivals at a station."""
    config = AppConfig()
    async with aiohttp.ClientSession() as session:
        engine = build_engine(config, session)
        arrivals = await engine.arrivals.get_arrivals(station_name)

    if format_json:
        _print_json([vars(a) for a in arrivals])
        return

    if not arrivals:
        print(f"No arrivals found for '{station_name}'", file=sys.stderr)
        sys.exit(1)
    print(f"\n{len(arrivals)} arrival(s) at {station_name}:\n")
    for arrival in arrivals:
        print(
            f"  [{arrival.line_id}] {arrival.direction} -> {arrival.destination}: "
            f"{arrival.arrival_seconds}s"
        )


async def show_delays(route_id: str | None, format_json: bool = False) -> None:
    """Print the delay report of one configured route, or of all of them."""
    config = AppConfig()
    reference = load_reference_data(config)
    route_ids = [route_id] if route_id else [r.id for r in reference.routes]
    if not route_ids:
        print("No routes configured.", file=sys.stderr)
        sys.exit(1)

    async with aiohttp.ClientSession() as session:
        engine = build_engine(config, session, reference)
        reports = [
            await engine.delay_status.get_delay_status(rid, config.calculation_timeout_seconds)
            for rid in route_ids
        ]

    if format_json:
        _print_json([report.model_dump(mode="json", by_alias=True) for report in reports])
        return

    for report in reports:
        print(f"\n{report.route_name} ({report.route_id}): {report.overall_status}")
        print(
            f"  expected {report.total_expected_duration} min, "
            f"estimated {report.total_estimated_duration} min"
        )
        for segment in report.segments:
            print(
                f"  - {segment.checkpoint_name} {segment.line_info}: {segment.status} "
                f"(wait {segment.estimated_wait_minutes} min, +{segment.delay_minutes})"
            )
        for alternative in report.alternatives:
            print(
                f"  * {alternative.description}: {alternative.total_duration_minutes} min, "
                f"saves {alternative.savings_minutes} min ({alternative.confidence})"
            )


async def show_departures(user_id: str, format_json: bool = False) -> None:
    """Print today's departure recommendations of a user."""
    config = AppConfig()
    reference = load_reference_data(config)

    async with aiohttp.ClientSession() as session:
        engine = build_engine(config, session, reference)
        snapshots = await engine.departure_calculator.calculate_for_today(
            user_id, timeout_seconds=config.calculation_timeout_seconds
        )

    if format_json:
        _print_json([vars(s) for s in snapshots])
        return

    if not snapshots:
        print(f"No departures today for user '{user_id}'", file=sys.stderr)
        sys.exit(1)
    for snapshot in snapshots:
        print(
            f"  {snapshot.departure_type} ({snapshot.setting_id}): arrive by "
            f"{snapshot.arrival_target}, leave in {snapshot.minutes_until_departure()} min "
            f"(travel {snapshot.estimated_travel_min} min)"
        )


async def main() -> None:
    """Main CLI entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Commute timing helper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Live arrivals at a station
  commute-timing arrivals 강남

  # Delay report of all configured routes
  commute-timing delays

  # Today's departures of a user
  commute-timing departures user-1
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    arrivals_parser = subparsers.add_parser("arrivals", help="Show live arrivals at a station")
    arrivals_parser.add_argument("station", help="Station name (e.g., 강남 or 강남역)")
    arrivals_parser.add_argument("--json", action="store_true", help="Output as JSON")

    delays_parser = subparsers.add_parser("delays", help="Check configured routes for delays")
    delays_parser.add_argument("route_id", nargs="?", help="Route ID (default: all routes)")
    delays_parser.add_argument("--json", action="store_true", help="Output as JSON")

    departures_parser = subparsers.add_parser(
        "departures", help="Calculate today's departures of a user"
    )
    departures_parser.add_argument("user_id", help="User ID from the departure settings")
    departures_parser.add_argument("--json", action="store_true", help="Output as JSON")

    parser.add_argument("--verbose", action="store_true", help="Log debug output")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.command == "arrivals":
            await show_arrivals(args.station, format_json=args.json)
        elif args.command == "delays":
            await show_delays(args.route_id, format_json=args.json)
        elif args.command == "departures":
            await show_departures(args.user_id, format_json=args.json)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)
    except (CommuteTimingError, ArrivalFetchError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
