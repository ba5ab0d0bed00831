"""Domain layer - core business logic and models."""

from nyc_transit_departures.domain.models import (
    AggregationResult,
    DeparturePayload,
    DepartureRecord,
    FailureRecord,
    ReferenceData,
    StationConfig,
)
from nyc_transit_departures.domain.ports import (
    DepartureAggregator,
    DepartureFetcher,
    PayloadPublisher,
)

__all__ = [
    "AggregationResult",
    "DepartureAggregator",
    "DepartureFetcher",
    "DeparturePayload",
    "DepartureRecord",
    "FailureRecord",
    "PayloadPublisher",
    "ReferenceData",
    "StationConfig",
]
