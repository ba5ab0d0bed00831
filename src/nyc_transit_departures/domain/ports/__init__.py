"""Ports (interfaces) for the ports-and-adapters architecture."""

from nyc_transit_departures.domain.ports.departure_aggregator import DepartureAggregator
from nyc_transit_departures.domain.ports.departure_fetcher import DepartureFetcher
from nyc_transit_departures.domain.ports.payload_publisher import PayloadPublisher

__all__ = [
    "DepartureAggregator",
    "DepartureFetcher",
    "PayloadPublisher",
]
