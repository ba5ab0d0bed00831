"""Adapters layer - external system integrations."""

from nyc_transit_departures.adapters.config import AppConfig, StationConfigurationLoader
from nyc_transit_departures.adapters.mta_api import GtfsDepartureFetcher, MtaHttpClient
from nyc_transit_departures.adapters.reference_data import ReferenceDataLoader

__all__ = [
    "AppConfig",
    "GtfsDepartureFetcher",
    "MtaHttpClient",
    "ReferenceDataLoader",
    "StationConfigurationLoader",
]
