"""Aggregates classified departures across stations."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from nyc_transit_departures.application.services.departure_classifier import DepartureClassifier
from nyc_transit_departures.domain.models.aggregation_result import AggregationResult
from nyc_transit_departures.domain.models.departure_record import DepartureRecord
from nyc_transit_departures.domain.models.station_config import StationConfig

logger = logging.getLogger(__name__)


def normalize_responses(responses: Any) -> list[Any]:
    """Wrap a single station response into a list."""
    if isinstance(responses, Mapping):
        return [responses]
    if isinstance(responses, list | tuple):
        return list(responses)
    logger.warning(f"Unexpected response type {type(responses).__name__}, treating as empty")
    return []


class AggregationPipeline:
    """Runs the classifier over a batch of station responses."""

    def __init__(self, classifier: DepartureClassifier) -> None:
        self.classifier = classifier

    def aggregate(
        self, responses: Any, station_configs: Sequence[StationConfig]
    ) -> AggregationResult:
        """Classify each response with the config at the same index.

        Records keep response order, then departure order. Failures are always
        empty here; fallback accounting belongs to the caller.
        """
        responses = normalize_responses(responses)
        if len(responses) != len(station_configs):
            logger.warning(
                f"Got {len(responses)} response(s) for {len(station_configs)} station(s), "
                "ignoring unmatched entries"
            )

        uptown: list[DepartureRecord] = []
        downtown: list[DepartureRecord] = []
        for response, station_config in zip(responses, station_configs, strict=False):
            station_uptown, station_downtown = self.classifier.classify(response, station_config)
            uptown.extend(station_uptown)
            downtown.extend(station_downtown)

        return AggregationResult(uptown=tuple(uptown), downtown=tuple(downtown))
