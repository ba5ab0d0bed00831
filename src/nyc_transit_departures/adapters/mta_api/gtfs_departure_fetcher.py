"""Departure fetcher backed by the MTA GTFS-realtime subway feeds."""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from nyct_gtfs import NYCTFeed

from nyc_transit_departures.adapters.mta_api.constants import FEED_URLS, ROUTE_FEEDS
from nyc_transit_departures.adapters.mta_api.http_client import MtaHttpClient
from nyc_transit_departures.domain.errors import FeedRequestError, UnknownStationError
from nyc_transit_departures.domain.models.reference_data import ReferenceData
from nyc_transit_departures.domain.models.station_directory_entry import StationDirectoryEntry
from nyc_transit_departures.domain.ports.departure_fetcher import DepartureFetcher

logger = logging.getLogger(__name__)

NORTHBOUND = "N"
SOUTHBOUND = "S"


def feeds_for_routes(routes: Sequence[str]) -> list[str]:
    """Feed names carrying the given routes, in first-seen order."""
    feed_names: list[str] = []
    for route in routes:
        for feed_name in ROUTE_FEEDS.get(route.upper(), ()):
            if feed_name not in feed_names:
                feed_names.append(feed_name)
    return feed_names


def _parse_feed(feed_name: str, content: bytes) -> NYCTFeed:
    """Decode a protobuf feed (blocking, run in a worker thread)."""
    feed = NYCTFeed(FEED_URLS[feed_name], fetch_immediately=False)
    feed.load_gtfs_bytes(content)
    return feed


class GtfsDepartureFetcher(DepartureFetcher):
    """Builds per-station departure responses from GTFS-realtime trip updates.

    Each response has the shape
    `{"stationId", "name", "lines": [{"name", "departures": {"S": [...], "N": [...]}}]}`
    where a departure is `{"routeId", "destinationStationId", "time"}` and the
    destination is the station id of the trip's final stop.
    """

    def __init__(self, reference_data: ReferenceData, http_client: MtaHttpClient) -> None:
        """Initialize the fetcher.

        Args:
            reference_data: Station directory used to map station ids to GTFS stops.
            http_client: Client downloading the raw feeds.
        """
        self._reference_data = reference_data
        self._http_client = http_client

    def _lookup(self, station_id: str | int) -> StationDirectoryEntry:
        entry = self._reference_data.stations.get(str(station_id))
        if entry is None:
            raise UnknownStationError(str(station_id))
        return entry

    async def _load_feeds(self, feed_names: Sequence[str]) -> dict[str, NYCTFeed]:
        """Download and decode every feed once."""
        contents = await asyncio.gather(
            *(self._http_client.fetch_feed(feed_name) for feed_name in feed_names)
        )
        feeds: dict[str, NYCTFeed] = {}
        for feed_name, content in zip(feed_names, contents, strict=True):
            try:
                feeds[feed_name] = await asyncio.to_thread(_parse_feed, feed_name, content)
            except Exception as e:
                raise FeedRequestError(f"Cannot decode MTA feed {feed_name}: {e}") from e
        return feeds

    def _destination_station_id(self, gtfs_stop_id: str) -> str:
        """Station id of a GTFS stop, or the raw stop id when it is not in the directory."""
        entry = self._reference_data.find_by_gtfs_stop_id(gtfs_stop_id)
        return entry.station_id if entry is not None else gtfs_stop_id

    def _build_response(
        self, entry: StationDirectoryEntry, feeds: Sequence[NYCTFeed]
    ) -> dict[str, Any]:
        """Collect the departures stopping at one station, one line per route."""
        platforms = {
            f"{entry.gtfs_stop_id}{NORTHBOUND}": NORTHBOUND,
            f"{entry.gtfs_stop_id}{SOUTHBOUND}": SOUTHBOUND,
        }
        lines: dict[str, dict[str, Any]] = {}

        for feed in feeds:
            for trip in feed.filter_trips():
                updates = trip.stop_time_updates
                if not updates:
                    continue
                destination = self._destination_station_id(updates[-1].stop_id)

                for update in updates:
                    direction = platforms.get(update.stop_id)
                    if direction is None:
                        continue
                    arrival = update.arrival or update.departure
                    if arrival is None:
                        continue

                    route_id = str(trip.route_id)
                    line = lines.setdefault(
                        route_id,
                        {"name": route_id, "departures": {SOUTHBOUND: [], NORTHBOUND: []}},
                    )
                    line["departures"][direction].append(
                        {
                            "routeId": route_id,
                            "destinationStationId": destination,
                            "time": int(arrival.timestamp()),
                        }
                    )

        for line in lines.values():
            for departures in line["departures"].values():
                departures.sort(key=lambda departure: departure["time"])

        return {
            "stationId": entry.station_id,
            "name": entry.stop_name,
            "lines": list(lines.values()),
        }

    async def fetch(self, station_ids: Sequence[str]) -> list[dict[str, Any]]:
        """Fetch one response per station id, in request order.

        Raises:
            UnknownStationError: If any station id is not in the directory.
            FeedRequestError: If a required feed cannot be downloaded or decoded.
        """
        entries = [self._lookup(station_id) for station_id in station_ids]

        entry_feeds = [feeds_for_routes(entry.routes) for entry in entries]
        feed_names = sorted({feed_name for names in entry_feeds for feed_name in names})
        for entry, names in zip(entries, entry_feeds, strict=True):
            if not names:
                logger.warning(
                    f"No realtime feed known for station {entry.station_id} ({entry.routes})"
                )

        feeds = await self._load_feeds(feed_names)
        return [
            self._build_response(entry, [feeds[name] for name in names])
            for entry, names in zip(entries, entry_feeds, strict=True)
        ]
