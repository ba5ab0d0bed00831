"""Domain models for NYC transit departures."""

from nyc_transit_departures.domain.models.aggregation_result import AggregationResult
from nyc_transit_departures.domain.models.complex import Complex
from nyc_transit_departures.domain.models.countdown_policy import CountdownPolicy
from nyc_transit_departures.domain.models.departure_payload import DeparturePayload
from nyc_transit_departures.domain.models.departure_record import DepartureRecord
from nyc_transit_departures.domain.models.failure_record import FailureRecord
from nyc_transit_departures.domain.models.raw_departure import RawDeparture
from nyc_transit_departures.domain.models.reference_data import ReferenceData
from nyc_transit_departures.domain.models.station_config import StationConfig
from nyc_transit_departures.domain.models.station_directory_entry import StationDirectoryEntry

__all__ = [
    "AggregationResult",
    "Complex",
    "CountdownPolicy",
    "DeparturePayload",
    "DepartureRecord",
    "FailureRecord",
    "RawDeparture",
    "ReferenceData",
    "StationConfig",
    "StationDirectoryEntry",
]
