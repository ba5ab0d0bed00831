"""Tests for the end-to-end aggregation cycle."""

from unittest.mock import AsyncMock

import pytest

from nyc_transit_departures.application.services import DepartureAggregationService
from nyc_transit_departures.domain.errors import DepartureFetchError
from nyc_transit_departures.domain.models import CountdownPolicy, ReferenceData, StationConfig

from tests.fakes import NOW, FakeFetcher, make_departure, make_response


@pytest.fixture
def frozen_clock(monkeypatch: pytest.MonkeyPatch) -> None:
    """Freeze the wall clock used by the countdown calculator."""
    monkeypatch.setattr(
        "nyc_transit_departures.application.services.countdown_calculator.time.time",
        lambda: NOW,
    )


@pytest.fixture
def station_configs() -> list[StationConfig]:
    return [
        StationConfig(station_id="127", walking_time_minutes=1),
        StationConfig(station_id="164", walking_time_minutes=0),
    ]


@pytest.fixture
def responses() -> dict:
    return {
        "127": make_response(
            south=[make_departure("1", "1", 60 * 9), make_departure("2", "1", 30)],
            north=[make_departure("3", "127", 60 * 4)],
        ),
        "164": make_response(south=[make_departure("A", "127", 60 * 2)]),
    }


@pytest.mark.usefixtures("frozen_clock")
class TestRunCycle:
    """Fetch, classify, shape and publish."""

    @pytest.mark.asyncio
    async def test_publishes_shaped_payload(
        self, reference_data: ReferenceData, station_configs: list, responses: dict
    ) -> None:
        """Given two stations, when a cycle runs, then the payload is shaped and published."""
        publisher = AsyncMock()
        service = DepartureAggregationService.create(reference_data, publisher=publisher)

        payload = await service.run_cycle(station_configs, FakeFetcher(responses))

        publisher.publish.assert_awaited_once_with(payload)
        assert payload.stations == ["127", "164"]
        assert [(r.route_id, r.countdown_minutes) for r in payload.downtown] == [
            ("1", 8),
            ("A", 2),
        ]
        assert [r.route_id for r in payload.uptown] == ["3"]
        assert not payload.has_failures

    @pytest.mark.asyncio
    async def test_sort_by_countdown(
        self, reference_data: ReferenceData, station_configs: list, responses: dict
    ) -> None:
        service = DepartureAggregationService.create(reference_data, sort_by_countdown=True)

        payload = await service.run_cycle(station_configs, FakeFetcher(responses))

        assert [r.route_id for r in payload.downtown] == ["A", "1"]

    @pytest.mark.asyncio
    async def test_partial_failure_is_reported(
        self, reference_data: ReferenceData, station_configs: list, responses: dict
    ) -> None:
        """Given one failing station, when a cycle runs, then the payload carries an error."""
        fetcher = FakeFetcher(
            responses, failing=["164"], bulk_error=DepartureFetchError("bulk down")
        )
        service = DepartureAggregationService.create(reference_data)

        payload = await service.run_cycle(station_configs, fetcher)

        assert payload.to_wire()["errors"] == [
            {"stationId": "164", "error": "Station 164 unavailable"}
        ]
        assert [r.route_id for r in payload.downtown] == ["1"]

    @pytest.mark.asyncio
    async def test_preview_mode(self, reference_data: ReferenceData) -> None:
        responses = {
            "127": make_response(
                south=[make_departure(str(i), "1", 60 * (i + 2)) for i in range(5)]
            )
        }
        service = DepartureAggregationService.create(reference_data)

        payload = await service.run_cycle(
            [StationConfig(station_id="127")], FakeFetcher(responses), preview_mode=True
        )

        assert [r.route_id for r in payload.downtown] == ["0", "1", "2"]

    @pytest.mark.asyncio
    async def test_exclude_policy_drops_far_departures(self, reference_data: ReferenceData) -> None:
        responses = {
            "127": make_response(
                south=[make_departure("1", "1", 60 * 75), make_departure("2", "1", 60 * 5)]
            )
        }
        service = DepartureAggregationService.create(
            reference_data, countdown_policy=CountdownPolicy.EXCLUDE
        )

        payload = await service.run_cycle([StationConfig(station_id="127")], FakeFetcher(responses))

        assert [r.route_id for r in payload.downtown] == ["2"]

    @pytest.mark.asyncio
    async def test_wrap_policy_folds_far_departures(self, reference_data: ReferenceData) -> None:
        responses = {"127": make_response(south=[make_departure("1", "1", 60 * 75)])}
        service = DepartureAggregationService.create(reference_data)

        payload = await service.run_cycle([StationConfig(station_id="127")], FakeFetcher(responses))

        assert [r.countdown_minutes for r in payload.downtown] == [15]
