"""CLI helpers for configuring and debugging NYC transit departures."""

import asyncio
import json
import logging
import sys
from datetime import datetime
from typing import Any

import aiohttp

from nyc_transit_departures.adapters.config import AppConfig, StationConfigurationLoader
from nyc_transit_departures.adapters.display import JsonStreamPublisher
from nyc_transit_departures.adapters.mta_api import GtfsDepartureFetcher, MtaHttpClient
from nyc_transit_departures.adapters.reference_data import ReferenceDataLoader
from nyc_transit_departures.application.services import (
    DepartureAggregationService,
    IdentifierResolver,
)
from nyc_transit_departures.application.services.aggregation_pipeline import normalize_responses
from nyc_transit_departures.application.services.identifier_resolver import COMPLEX_ALIASES
from nyc_transit_departures.domain.errors import DepartureFetchError
from nyc_transit_departures.domain.models import ReferenceData

PREVIEW_COUNT = 3


def search_directory(reference_data: ReferenceData, query: str) -> list[dict[str, Any]]:
    """Find stations whose stop name contains the query (case-insensitive)."""
    query_lower = query.lower().strip()
    return [
        {
            "station_id": entry.station_id,
            "complex_id": entry.complex_id,
            "stop_name": entry.stop_name,
            "line": entry.line_label,
            "routes": list(entry.routes),
        }
        for entry in reference_data.stations.values()
        if query_lower in entry.stop_name.lower()
    ]


def describe_station(reference_data: ReferenceData, station_id: str) -> dict[str, Any] | None:
    """Directory entry of a station together with its complex mapping."""
    entry = reference_data.stations.get(station_id)
    if entry is None:
        return None

    resolver = IdentifierResolver(reference_data)
    return {
        "station_id": entry.station_id,
        "complex_id": entry.complex_id,
        "complex_alias": COMPLEX_ALIASES.get(entry.complex_id),
        "complex_name": resolver.complex_name(entry.complex_id),
        "gtfs_stop_id": entry.gtfs_stop_id,
        "stop_name": entry.stop_name,
        "line": entry.line_label,
        "routes": list(entry.routes),
        "north_label": entry.north_label,
        "south_label": entry.south_label,
    }


def format_station_info(details: dict[str, Any]) -> str:
    """Render station details for the terminal."""
    lines = [
        f"\n{details['stop_name']} (station {details['station_id']})",
        f"  Line:        {details['line']}",
        f"  Routes:      {', '.join(details['routes']) or '-'}",
        f"  GTFS stop:   {details['gtfs_stop_id']}",
        f"  Complex ID:  {details['complex_id']}",
    ]
    if details["complex_alias"]:
        alias = f"complex {details['complex_id']} -> {details['complex_alias']}"
        lines.append(f"  Alias:       {alias}")
    lines.append(f"  Complex:     {details['complex_name'] or 'NOT FOUND'}")
    lines.append(f"  North label: {details['north_label'] or '-'}")
    lines.append(f"  South label: {details['south_label'] or '-'}")
    if not details["south_label"]:
        lines.append("  Note: no southbound service at this station")
    if not details["north_label"]:
        lines.append("  Note: no northbound service at this station")
    return "\n".join(lines)


def summarize_response(response: Any, resolver: IdentifierResolver) -> list[str]:
    """Describe a raw station response line by line."""
    if not isinstance(response, dict) or not isinstance(response.get("lines"), list):
        return ["  No line data returned"]
    if not response["lines"]:
        return ["  No line data returned"]

    output: list[str] = []
    for line in response["lines"]:
        departures = line.get("departures", {}) if isinstance(line, dict) else {}
        southbound = departures.get("S") or []
        northbound = departures.get("N") or []
        output.append(
            f"  Line {line.get('name', '?')}: "
            f"{len(southbound)} southbound, {len(northbound)} northbound"
        )
        for label, direction in (("northbound", northbound), ("southbound", southbound)):
            for departure in direction[:PREVIEW_COUNT]:
                destination = departure.get("destinationStationId")
                name = resolver.destination_name(destination) or f"unresolved {destination}"
                when = datetime.fromtimestamp(int(departure.get("time", 0))).strftime("%H:%M:%S")
                output.append(f"    {label}: {departure.get('routeId')} to {name} at {when}")
    return output


def _load_reference_data(config: AppConfig) -> ReferenceData:
    return ReferenceDataLoader.load(config.stations_file, config.complexes_file)


def _build_fetcher(
    config: AppConfig, reference_data: ReferenceData, session: aiohttp.ClientSession
) -> GtfsDepartureFetcher:
    http_client = MtaHttpClient(
        session, api_key=config.mta_api_key, timeout_seconds=config.mta_api_timeout
    )
    return GtfsDepartureFetcher(reference_data, http_client)


async def debug_station(config: AppConfig, station_id: str) -> None:
    """Fetch one station live and print what the provider returns."""
    reference_data = _load_reference_data(config)
    details = describe_station(reference_data, station_id)
    if details is None:
        print(f"Station {station_id} not found in {config.stations_file}.", file=sys.stderr)
        sys.exit(1)
    print(format_station_info(details))

    print("\nLive departures:")
    async with aiohttp.ClientSession() as session:
        fetcher = _build_fetcher(config, reference_data, session)
        try:
            responses = normalize_responses(await fetcher.fetch([station_id]))
        except DepartureFetchError as e:
            print(f"  Provider error: {e}", file=sys.stderr)
            sys.exit(1)

    resolver = IdentifierResolver(reference_data)
    for response in responses:
        print("\n".join(summarize_response(response, resolver)))


async def run_departures(config: AppConfig, preview: bool) -> None:
    """Run one aggregation cycle for the configured stations and print the payload."""
    station_configs = StationConfigurationLoader.load(config)
    if not station_configs:
        print(f"No stations configured in {config.config_file}.", file=sys.stderr)
        sys.exit(1)

    reference_data = _load_reference_data(config)
    service = DepartureAggregationService.create(
        reference_data,
        publisher=JsonStreamPublisher(sys.stdout),
        countdown_policy=config.countdown_policy,
        preview_limit=config.preview_limit,
        sort_by_countdown=config.sort_by_countdown,
        fetch_timeout_seconds=config.fetch_timeout_seconds,
        concurrent_fallback=config.concurrent_fallback,
    )
    async with aiohttp.ClientSession() as session:
        fetcher = _build_fetcher(config, reference_data, session)
        await service.run_cycle(
            station_configs, fetcher, preview_mode=preview or config.preview_mode
        )


async def main() -> None:
    """Main CLI entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="NYC Transit Departures Helper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Search for stations
  ntd-config search "Hudson"

  # Show station and complex details
  ntd-config info 471

  # Fetch live departures for one station
  ntd-config debug 471

  # Run one cycle for the stations in config.toml
  ntd-config departures --preview
        """,
    )
    parser.add_argument("--config", help="TOML configuration file (default: config.toml)")
    parser.add_argument("--stations-file", help="Station directory (Stations.csv)")
    parser.add_argument("--complexes-file", help="Complex table (complexes.json)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Search command
    search_parser = subparsers.add_parser("search", help="Search stations by name")
    search_parser.add_argument("query", help="Part of the stop name")
    search_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # Info command
    info_parser = subparsers.add_parser("info", help="Show station and complex details")
    info_parser.add_argument("station_id", help="Station ID (e.g., 471)")
    info_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # Debug command
    debug_parser = subparsers.add_parser("debug", help="Fetch live departures for one station")
    debug_parser.add_argument("station_id", help="Station ID (e.g., 471)")

    # Departures command
    departures_parser = subparsers.add_parser(
        "departures", help="Run one cycle for the configured stations"
    )
    departures_parser.add_argument(
        "--preview", action="store_true", help="Limit each direction to 3 departures"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    overrides = {
        key: value
        for key, value in (
            ("config_file", args.config),
            ("stations_file", args.stations_file),
            ("complexes_file", args.complexes_file),
        )
        if value
    }
    config = AppConfig(**overrides)

    try:
        if args.command == "search":
            results = search_directory(_load_reference_data(config), args.query)
            if args.json:
                print(json.dumps(results, indent=2, ensure_ascii=False))
            else:
                if not results:
                    print(f"No stations found for '{args.query}'", file=sys.stderr)
                    sys.exit(1)
                print(f"\nFound {len(results)} station(s):\n")
                for station in results:
                    print(f"  {station['stop_name']} ({' '.join(station['routes'])})")
                    print(
                        f"    Station ID: {station['station_id']}  "
                        f"Complex ID: {station['complex_id']}"
                    )
                    print()

        elif args.command == "info":
            details = describe_station(_load_reference_data(config), args.station_id)
            if details is None:
                print(f"Station {args.station_id} not found.", file=sys.stderr)
                sys.exit(1)
            if args.json:
                print(json.dumps(details, indent=2, ensure_ascii=False))
            else:
                print(format_station_info(details))

        elif args.command == "debug":
            await debug_station(config, args.station_id)

        elif args.command == "departures":
            await run_departures(config, preview=args.preview)

    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
