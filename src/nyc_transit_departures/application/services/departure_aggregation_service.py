"""Runs one departure aggregation cycle end to end."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from nyc_transit_departures.application.services.aggregation_pipeline import AggregationPipeline
from nyc_transit_departures.application.services.countdown_calculator import CountdownCalculator
from nyc_transit_departures.application.services.departure_classifier import DepartureClassifier
from nyc_transit_departures.application.services.departure_sorter import DepartureSorter
from nyc_transit_departures.application.services.fallback_controller import FallbackController
from nyc_transit_departures.application.services.identifier_resolver import IdentifierResolver
from nyc_transit_departures.application.services.result_shaper import (
    DEFAULT_PREVIEW_LIMIT,
    ResultShaper,
)
from nyc_transit_departures.domain.models.countdown_policy import CountdownPolicy
from nyc_transit_departures.domain.ports.departure_aggregator import DepartureAggregator

if TYPE_CHECKING:
    from nyc_transit_departures.domain.models.departure_payload import DeparturePayload
    from nyc_transit_departures.domain.models.reference_data import ReferenceData
    from nyc_transit_departures.domain.models.station_config import StationConfig
    from nyc_transit_departures.domain.ports import DepartureFetcher, PayloadPublisher

logger = logging.getLogger(__name__)


class DepartureAggregationService(DepartureAggregator):
    """Fetches, classifies, shapes and publishes departures for a set of stations."""

    def __init__(
        self,
        controller: FallbackController,
        shaper: ResultShaper,
        publisher: PayloadPublisher | None = None,
        sort_by_countdown: bool = False,
    ) -> None:
        """Initialize the service.

        Args:
            controller: Fallback controller running the fetch strategy.
            shaper: Shaper producing the outbound payload.
            publisher: Optional display transport receiving every payload.
            sort_by_countdown: Order each direction by soonest departure.
        """
        self.controller = controller
        self.shaper = shaper
        self.publisher = publisher
        self.sort_by_countdown = sort_by_countdown

    @classmethod
    def create(
        cls,
        reference_data: ReferenceData,
        publisher: PayloadPublisher | None = None,
        countdown_policy: CountdownPolicy = CountdownPolicy.WRAP,
        preview_limit: int = DEFAULT_PREVIEW_LIMIT,
        sort_by_countdown: bool = False,
        fetch_timeout_seconds: float | None = None,
        concurrent_fallback: bool = True,
    ) -> DepartureAggregationService:
        """Wire the service and its collaborators from reference data and settings."""
        classifier = DepartureClassifier(
            IdentifierResolver(reference_data), CountdownCalculator(policy=countdown_policy)
        )
        controller = FallbackController(
            AggregationPipeline(classifier),
            fetch_timeout_seconds=fetch_timeout_seconds,
            concurrent=concurrent_fallback,
        )
        return cls(
            controller,
            ResultShaper(preview_limit=preview_limit),
            publisher=publisher,
            sort_by_countdown=sort_by_countdown,
        )

    async def run_cycle(
        self,
        station_configs: Sequence[StationConfig],
        fetcher: DepartureFetcher,
        preview_mode: bool = False,
    ) -> DeparturePayload:
        """Run one cycle for the configured stations and publish the payload."""
        station_ids = [config.station_id for config in station_configs]
        result = await self.controller.run(station_ids, station_configs, fetcher)

        payload = self.shaper.shape(result, station_ids, preview_mode=preview_mode)
        if self.sort_by_countdown:
            payload = DepartureSorter.sort_by_countdown(payload)

        if payload.has_failures:
            logger.warning(
                f"{len(payload.failures)} station(s) failed, but continuing with available data"
            )
        logger.info(
            f"Cycle complete: {len(payload.uptown)} uptown, {len(payload.downtown)} downtown"
        )

        if self.publisher is not None:
            await self.publisher.publish(payload)
        return payload
