"""Command line interface for the Mobilitybox API."""

import asyncio
import json
import logging
import sys
from dataclasses import asdict
from datetime import tzinfo
from typing import Any

from mobilitybox.adapters.config import MobilityboxSettings
from mobilitybox.adapters.mobilitybox_api import Mobilitybox
from mobilitybox.domain.models import Departure, Station, Trip

logger = logging.getLogger(__name__)


def _json_default(value: Any) -> Any:
    """Serialize datetimes for JSON output."""
    if hasattr(value, "isoformat"):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def station_to_dict(station: Station) -> dict[str, Any]:
    """Convert a station to a JSON-friendly dict (without the client reference)."""
    position = asdict(station.position) if station.position else None
    return {"id": station.id, "name": station.name, "position": position}


def format_station(station: Station) -> str:
    """Format a station as a single line."""
    line = f"  {station.name} ({station.id})"
    if station.position:
        line += f"  [{station.position.latitude}, {station.position.longitude}]"
    return line


def format_departure(departure: Departure, tz: tzinfo | None = None) -> str:
    """Format a departure as ``time line headsign``, marking predicted times."""
    scheduled = departure.departure_time.scheduled_at_formatted(tz) or "--:--"
    predicted = departure.departure_time.predicted_at_formatted(tz)
    time_text = scheduled if not predicted or predicted == scheduled else f"{scheduled} ({predicted})"
    platform = f"  Pl. {departure.platform}" if departure.platform else ""
    return f"  - {time_text:<14} {departure.line_name or '':<8} {departure.headsign or ''}{platform}"


def format_trip(trip: Trip, tz: tzinfo | None = None) -> list[str]:
    """Format a trip header and its stops."""
    lines = [f"Trip: {trip.name or trip.id} ({trip.date_formatted(tz) or 'no date'})"]
    for stop in trip.stops:
        arrival = stop.arrival.scheduled_at_formatted(tz) or ""
        departure = stop.departure.scheduled_at_formatted(tz) or ""
        name = stop.station.name if stop.station else "?"
        status = f"  [{stop.status}]" if stop.status else ""
        lines.append(f"  {arrival:>5} {departure:>5}  {name}{status}")
    return lines


def _print_stations(stations: list[Station], as_json: bool) -> None:
    if as_json:
        print(json.dumps([station_to_dict(s) for s in stations], indent=2, ensure_ascii=False))
        return
    if not stations:
        print("No stations found.")
        return
    print(f"\nFound {len(stations)} station(s):")
    for station in stations:
        print(format_station(station))


async def _handle_attributions_command(mobilitybox: Mobilitybox) -> None:
    attributions = await mobilitybox.get_attributions()
    print(attributions.get("text", ""))


async def _handle_search_command(
    mobilitybox: Mobilitybox, query: str, near: list[float] | None, as_json: bool
) -> None:
    latitude, longitude = near if near else (None, None)
    stations = await mobilitybox.find_stations_by_name(query, longitude=longitude, latitude=latitude)
    _print_stations(stations, as_json)


async def _handle_nearby_command(
    mobilitybox: Mobilitybox, latitude: float, longitude: float, as_json: bool
) -> None:
    stations = await mobilitybox.find_stations_by_position(latitude, longitude)
    _print_stations(stations, as_json)


async def _handle_station_command(
    mobilitybox: Mobilitybox, station_id: str, id_type: str, as_json: bool
) -> None:
    station = await mobilitybox.find_stations_by_id(station_id, id_type=id_type)
    _print_stations([station], as_json)


async def _handle_departures_command(
    mobilitybox: Mobilitybox,
    station_id: str,
    max_departures: int | None,
    as_json: bool,
    tz: tzinfo | None,
) -> None:
    station = await mobilitybox.find_stations_by_id(station_id)
    departures = await station.get_next_departures(max_departures=max_departures)
    if as_json:
        print(
            json.dumps(
                [asdict(d) for d in departures], indent=2, default=_json_default, ensure_ascii=False
            )
        )
        return
    print(f"\nNext departures for station: {station.name}")
    for departure in departures:
        print(format_departure(departure, tz))


async def _handle_trip_command(
    mobilitybox: Mobilitybox, trip_id: str, as_json: bool, tz: tzinfo | None
) -> None:
    trip = await mobilitybox.get_trip(trip_id)
    if as_json:
        data = {
            "id": trip.id,
            "name": trip.name,
            "stops": [
                {
                    "station": station_to_dict(stop.station) if stop.station else None,
                    "status": stop.status,
                    "arrival": asdict(stop.arrival),
                    "departure": asdict(stop.departure),
                }
                for stop in trip.stops
            ],
        }
        print(json.dumps(data, indent=2, default=_json_default, ensure_ascii=False))
        return
    for line in format_trip(trip, tz):
        print(line)


def _handle_tiles_command(mobilitybox: Mobilitybox) -> None:
    sources = {
        "station_map": mobilitybox.station_map_vector_tile_source(),
        "transit_map": mobilitybox.transit_map_vector_tile_source(),
    }
    print(json.dumps(sources, indent=2))


def _setup_argparse() -> Any:
    """Set up and configure argument parser."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Mobilitybox transit API client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Search for stations
  mobilitybox search "Hamburg-Dammtor"

  # Next departures at a station
  mobilitybox departures <station_id> --max 10

  # Show a trip with its stops
  mobilitybox trip <trip_id>

Configuration: MOBILITYBOX_ACCESS_TOKEN, MOBILITYBOX_BASE_URL, MOBILITYBOX_TIMEZONE
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    subparsers.add_parser("attributions", help="Show data attributions")

    search_parser = subparsers.add_parser("search", help="Search for stations by name")
    search_parser.add_argument("query", help="Station name to search for")
    search_parser.add_argument(
        "--near",
        nargs=2,
        type=float,
        metavar=("LATITUDE", "LONGITUDE"),
        help="Prefer stations near this position",
    )
    search_parser.add_argument("--json", action="store_true", help="Output as JSON")

    nearby_parser = subparsers.add_parser("nearby", help="Find stations near a position")
    nearby_parser.add_argument("latitude", type=float, help="Latitude")
    nearby_parser.add_argument("longitude", type=float, help="Longitude")
    nearby_parser.add_argument("--json", action="store_true", help="Output as JSON")

    station_parser = subparsers.add_parser("station", help="Look up a station by ID")
    station_parser.add_argument("station_id", help="Station ID")
    station_parser.add_argument(
        "--id-type", default="mobilitybox", help="ID namespace (default: mobilitybox)"
    )
    station_parser.add_argument("--json", action="store_true", help="Output as JSON")

    departures_parser = subparsers.add_parser("departures", help="Show next departures")
    departures_parser.add_argument("station_id", help="Station ID")
    departures_parser.add_argument(
        "--max", dest="max_departures", type=int, help="Maximum number of departures"
    )
    departures_parser.add_argument("--json", action="store_true", help="Output as JSON")

    trip_parser = subparsers.add_parser("trip", help="Show a trip with its stops")
    trip_parser.add_argument("trip_id", help="Trip ID")
    trip_parser.add_argument("--json", action="store_true", help="Output as JSON")

    subparsers.add_parser("tiles", help="Print vector tile sources for map renderers")

    return parser


async def _execute_command(args: Any, mobilitybox: Mobilitybox, tz: tzinfo | None) -> None:
    """Execute the appropriate command based on args."""
    if args.command == "attributions":
        await _handle_attributions_command(mobilitybox)
    elif args.command == "search":
        await _handle_search_command(mobilitybox, args.query, args.near, args.json)
    elif args.command == "nearby":
        await _handle_nearby_command(mobilitybox, args.latitude, args.longitude, args.json)
    elif args.command == "station":
        await _handle_station_command(mobilitybox, args.station_id, args.id_type, args.json)
    elif args.command == "departures":
        await _handle_departures_command(
            mobilitybox, args.station_id, args.max_departures, args.json, tz
        )
    elif args.command == "trip":
        await _handle_trip_command(mobilitybox, args.trip_id, args.json, tz)
    elif args.command == "tiles":
        _handle_tiles_command(mobilitybox)


async def main() -> None:
    """Main CLI entry point."""
    parser = _setup_argparse()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        settings = MobilityboxSettings()
        async with Mobilitybox.from_settings(settings) as mobilitybox:
            await _execute_command(args, mobilitybox, settings.zone())
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
