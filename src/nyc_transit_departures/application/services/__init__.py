"""Application services."""

from nyc_transit_departures.application.services.aggregation_pipeline import AggregationPipeline
from nyc_transit_departures.application.services.countdown_calculator import CountdownCalculator
from nyc_transit_departures.application.services.departure_aggregation_service import (
    DepartureAggregationService,
)
from nyc_transit_departures.application.services.departure_classifier import DepartureClassifier
from nyc_transit_departures.application.services.departure_sorter import DepartureSorter
from nyc_transit_departures.application.services.fallback_controller import FallbackController
from nyc_transit_departures.application.services.identifier_resolver import IdentifierResolver
from nyc_transit_departures.application.services.result_shaper import ResultShaper

__all__ = [
    "AggregationPipeline",
    "CountdownCalculator",
    "DepartureAggregationService",
    "DepartureClassifier",
    "DepartureSorter",
    "FallbackController",
    "IdentifierResolver",
    "ResultShaper",
]
