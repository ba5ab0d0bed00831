"""Classifies one station's raw departures into uptown and downtown records."""

import logging
from collections.abc import Mapping
from typing import Any

from nyc_transit_departures.application.services.countdown_calculator import CountdownCalculator
from nyc_transit_departures.application.services.identifier_resolver import IdentifierResolver
from nyc_transit_departures.domain.models.departure_record import DepartureRecord
from nyc_transit_departures.domain.models.raw_departure import RawDeparture
from nyc_transit_departures.domain.models.station_config import StationConfig

logger = logging.getLogger(__name__)

SOUTHBOUND = "S"
NORTHBOUND = "N"


class DepartureClassifier:
    """Turns a station response into direction-tagged departure records."""

    def __init__(self, resolver: IdentifierResolver, calculator: CountdownCalculator) -> None:
        self.resolver = resolver
        self.calculator = calculator

    def classify(
        self, response: Any, station_config: StationConfig
    ) -> tuple[list[DepartureRecord], list[DepartureRecord]]:
        """Classify a station response.

        Args:
            response: Provider response for one station (`{"lines": [...]}`).
            station_config: Configuration of the station the response belongs to.

        Returns:
            Tuple of (uptown, downtown) records in emission order.
        """
        uptown: list[DepartureRecord] = []
        downtown: list[DepartureRecord] = []

        lines = response.get("lines") if isinstance(response, Mapping) else None
        if not isinstance(lines, list):
            logger.warning(f"No line data for station {station_config.station_id}")
            return uptown, downtown

        for line in lines:
            departures = line.get("departures") if isinstance(line, Mapping) else None
            if not isinstance(departures, Mapping):
                continue

            self._collect(
                departures.get(SOUTHBOUND),
                station_config,
                station_config.interested_downtown,
                downtown,
            )
            self._collect(
                departures.get(NORTHBOUND),
                station_config,
                station_config.interested_uptown,
                uptown,
            )

        return uptown, downtown

    def _collect(
        self,
        raw_departures: Any,
        station_config: StationConfig,
        interested: bool,
        target: list[DepartureRecord],
    ) -> None:
        """Append a record for every usable departure of one direction."""
        if not isinstance(raw_departures, list):
            return

        for payload in raw_departures:
            try:
                record = self._to_record(payload, station_config, interested)
            except (ValueError, TypeError, KeyError, ArithmeticError) as e:
                logger.debug(f"Skipping departure at station {station_config.station_id}: {e}")
                continue
            if record is not None:
                target.append(record)

    def _to_record(
        self, payload: Any, station_config: StationConfig, interested: bool
    ) -> DepartureRecord | None:
        """Build a record, or None if the departure is dropped."""
        departure = RawDeparture.from_payload(payload)

        complex_id = self.resolver.resolve(departure.destination_station_id)
        if complex_id is None or not interested:
            return None

        destination_name = self.resolver.complex_name(complex_id)
        if destination_name is None:
            logger.debug(f"No complex name for {complex_id} ({departure.route_id} train)")
            return None

        countdown = self.calculator.countdown(
            departure.arrival_unix_time, station_config.walking_time_minutes
        )
        if countdown is None:
            return None

        return DepartureRecord(
            route_id=departure.route_id,
            countdown_minutes=countdown,
            destination_name=destination_name,
            walking_time_minutes=station_config.walking_time_minutes,
        )
