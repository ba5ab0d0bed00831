"""Bulk-then-per-station fetching with partial-failure accounting."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from nyc_transit_departures.domain.models.aggregation_result import AggregationResult
from nyc_transit_departures.domain.models.failure_record import FailureRecord

if TYPE_CHECKING:
    from nyc_transit_departures.application.services.aggregation_pipeline import (
        AggregationPipeline,
    )
    from nyc_transit_departures.domain.models.station_config import StationConfig
    from nyc_transit_departures.domain.ports import DepartureFetcher

logger = logging.getLogger(__name__)


def describe_error(error: BaseException, timeout_seconds: float | None = None) -> str:
    """Human readable message for a failed fetch."""
    if isinstance(error, TimeoutError):
        return f"Timed out after {timeout_seconds}s" if timeout_seconds else "Timed out"
    return str(error) or type(error).__name__


class FallbackController:
    """Fetches all stations in one request and falls back to one request per station."""

    def __init__(
        self,
        pipeline: AggregationPipeline,
        fetch_timeout_seconds: float | None = None,
        concurrent: bool = True,
    ) -> None:
        """Initialize the controller.

        Args:
            pipeline: Pipeline used to classify fetched responses.
            fetch_timeout_seconds: Upper bound for a single fetch. None waits indefinitely.
            concurrent: Issue per-station fallback fetches concurrently.
        """
        self.pipeline = pipeline
        self.fetch_timeout_seconds = fetch_timeout_seconds
        self.concurrent = concurrent

    async def _fetch(self, fetcher: DepartureFetcher, station_ids: Sequence[str]) -> Any:
        """Fetch with the configured timeout."""
        if self.fetch_timeout_seconds is None:
            return await fetcher.fetch(list(station_ids))
        return await asyncio.wait_for(
            fetcher.fetch(list(station_ids)), timeout=self.fetch_timeout_seconds
        )

    async def run(
        self,
        station_ids: Sequence[str],
        station_configs: Sequence[StationConfig],
        fetcher: DepartureFetcher,
    ) -> AggregationResult:
        """Run one aggregation cycle.

        Never raises for fetch or processing failures: stations that fail end up
        in `failures` and all other stations still contribute their departures.
        """
        try:
            logger.info(f"Fetching departures for {len(station_ids)} station(s) in one request")
            responses = await self._fetch(fetcher, station_ids)
            return self.pipeline.aggregate(responses, station_configs)
        except Exception as e:
            logger.warning(
                f"Bulk fetch failed: {describe_error(e, self.fetch_timeout_seconds)}; "
                "falling back to individual stations"
            )

        return await self._run_per_station(station_ids, station_configs, fetcher)

    async def _run_per_station(
        self,
        station_ids: Sequence[str],
        station_configs: Sequence[StationConfig],
        fetcher: DepartureFetcher,
    ) -> AggregationResult:
        """Fetch each station on its own and merge the outcomes in station order."""
        pairs = list(zip(station_ids, station_configs, strict=False))

        if self.concurrent:
            slots = await asyncio.gather(
                *(self._run_single(station_id, config, fetcher) for station_id, config in pairs)
            )
        else:
            slots = [
                await self._run_single(station_id, config, fetcher)
                for station_id, config in pairs
            ]

        result = AggregationResult()
        for slot in slots:
            result = result.merge(slot)
        return result

    async def _run_single(
        self, station_id: str, station_config: StationConfig, fetcher: DepartureFetcher
    ) -> AggregationResult:
        """Fetch and classify one station; a failure becomes a failure record."""
        try:
            response = await self._fetch(fetcher, [station_id])
            result = self.pipeline.aggregate(response, [station_config])
        except Exception as e:
            message = describe_error(e, self.fetch_timeout_seconds)
            logger.warning(f"Station {station_id} failed: {message}")
            return AggregationResult(
                failures=(FailureRecord(station_id=station_id, error_message=message),)
            )

        logger.info(f"Station {station_id} processed individually")
        return result
