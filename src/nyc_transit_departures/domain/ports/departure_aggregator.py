"""Departure aggregator port."""

from collections.abc import Sequence
from typing import Protocol

from nyc_transit_departures.domain.models.departure_payload import DeparturePayload
from nyc_transit_departures.domain.models.station_config import StationConfig
from nyc_transit_departures.domain.ports.departure_fetcher import DepartureFetcher


class DepartureAggregator(Protocol):
    """Port for running one aggregation cycle."""

    async def run_cycle(
        self,
        station_configs: Sequence[StationConfig],
        fetcher: DepartureFetcher,
        preview_mode: bool = False,
    ) -> DeparturePayload:
        """Fetch, classify and shape departures for the given stations."""
        ...
