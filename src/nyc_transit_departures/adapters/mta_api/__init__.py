"""MTA GTFS-realtime adapters."""

from nyc_transit_departures.adapters.mta_api.gtfs_departure_fetcher import GtfsDepartureFetcher
from nyc_transit_departures.adapters.mta_api.http_client import MtaHttpClient

__all__ = ["GtfsDepartureFetcher", "MtaHttpClient"]
