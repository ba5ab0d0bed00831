"""Tests for the Starlette web adapter."""

from collections.abc import Sequence
from typing import Any

import pytest
from starlette.testclient import TestClient

from nyc_transit_departures.adapters.config import AppConfig
from nyc_transit_departures.adapters.display import LatestPayloadPublisher
from nyc_transit_departures.adapters.web import DeparturesWebAdapter
from nyc_transit_departures.domain.models import (
    DeparturePayload,
    DepartureRecord,
    FailureRecord,
    StationConfig,
)


class RecordingAggregator:
    """Aggregator double that records its calls and publishes a canned payload."""

    def __init__(self, latest: LatestPayloadPublisher) -> None:
        self.latest = latest
        self.calls: list[dict[str, Any]] = []

    async def run_cycle(
        self,
        station_configs: Sequence[StationConfig],
        fetcher: Any,
        preview_mode: bool = False,
    ) -> DeparturePayload:
        self.calls.append(
            {"stations": list(station_configs), "fetcher": fetcher, "preview_mode": preview_mode}
        )
        payload = DeparturePayload(
            stations=[config.station_id for config in station_configs],
            downtown=[
                DepartureRecord(
                    route_id="A",
                    countdown_minutes=4,
                    destination_name="Inwood-207 St",
                    walking_time_minutes=2,
                )
            ],
            uptown=[],
            failures=[FailureRecord(station_id="999", error_message="HTTP 503")],
        )
        await self.latest.publish(payload)
        return payload


@pytest.fixture
def latest() -> LatestPayloadPublisher:
    return LatestPayloadPublisher()


@pytest.fixture
def aggregator(latest: LatestPayloadPublisher) -> RecordingAggregator:
    return RecordingAggregator(latest)


@pytest.fixture
def adapter(
    aggregator: RecordingAggregator, latest: LatestPayloadPublisher
) -> DeparturesWebAdapter:
    return DeparturesWebAdapter(
        aggregator,
        AppConfig(display_type="list", rate_limit_per_minute=0),
        fetcher_factory=lambda api_key: f"fetcher:{api_key}",
        latest=latest,
        default_stations=[StationConfig(station_id="471", walking_time_minutes=4)],
    )


@pytest.fixture
def client(adapter: DeparturesWebAdapter) -> TestClient:
    return TestClient(adapter.build_app())


def test_adapter_requires_app_config(
    aggregator: RecordingAggregator, latest: LatestPayloadPublisher
) -> None:
    with pytest.raises(TypeError, match="AppConfig"):
        DeparturesWebAdapter(aggregator, {}, lambda _: None, latest)  # type: ignore[arg-type]


def test_healthz(client: TestClient) -> None:
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.text == "Ok"


def test_post_departures_runs_cycle(client: TestClient, aggregator: RecordingAggregator) -> None:
    """Given a station list, when posting, then one cycle runs and the wire payload returns."""
    response = client.post(
        "/api/departures",
        json={
            "stations": [
                {"stationId": "164", "walkingTime": 2, "dir": {"upTown": False, "downTown": True}}
            ],
            "apiKey": "key-1",
            "displayType": "marquee",
        },
    )

    assert response.status_code == 200
    assert response.json() == {
        "stations": ["164"],
        "data": [
            {
                "downTown": [
                    {
                        "routeId": "A",
                        "time": 4,
                        "destination": "Inwood-207 St",
                        "walkingTime": 2,
                    }
                ]
            },
            {"upTown": []},
        ],
        "errors": [{"stationId": "999", "error": "HTTP 503"}],
    }
    [call] = aggregator.calls
    assert call["stations"] == [
        StationConfig(
            station_id="164",
            walking_time_minutes=2,
            interested_uptown=False,
            interested_downtown=True,
        )
    ]
    assert call["fetcher"] == "fetcher:key-1"
    assert call["preview_mode"] is True


def test_post_without_stations_uses_configured_stations(
    client: TestClient, aggregator: RecordingAggregator
) -> None:
    response = client.post("/api/departures", json={})

    assert response.status_code == 200
    assert [c.station_id for c in aggregator.calls[0]["stations"]] == ["471"]
    assert aggregator.calls[0]["preview_mode"] is False
    assert aggregator.calls[0]["fetcher"] == "fetcher:None"


def test_post_with_only_invalid_stations_is_rejected(
    client: TestClient, aggregator: RecordingAggregator
) -> None:
    response = client.post("/api/departures", json={"stations": [{"walkingTime": 3}]})

    assert response.status_code == 422
    assert aggregator.calls == []


@pytest.mark.parametrize("body", [b"not json", b"[1, 2]", b'{"stations": "471"}'])
def test_post_with_invalid_body_is_rejected(client: TestClient, body: bytes) -> None:
    response = client.post(
        "/api/departures", content=body, headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 422
    assert "Invalid request" in response.json()["error"]


def test_latest_is_404_before_first_cycle(client: TestClient) -> None:
    response = client.get("/api/departures/latest")

    assert response.status_code == 404


def test_latest_returns_last_payload(client: TestClient) -> None:
    client.post("/api/departures", json={"stations": [{"station_id": "164"}]})

    response = client.get("/api/departures/latest")

    assert response.status_code == 200
    assert response.json()["stations"] == ["164"]


def test_rate_limit_applies_to_posts() -> None:
    """Given a limit of one request per minute, when posting twice, then the second gets 429."""
    latest = LatestPayloadPublisher()
    adapter = DeparturesWebAdapter(
        RecordingAggregator(latest),
        AppConfig(rate_limit_per_minute=1),
        fetcher_factory=lambda api_key: None,
        latest=latest,
    )
    client = TestClient(adapter.build_app())
    body = {"stations": [{"station_id": "164"}]}

    assert client.post("/api/departures", json=body).status_code == 200
    limited = client.post("/api/departures", json=body)

    assert limited.status_code == 429
    assert "Retry-After" in limited.headers
    assert client.get("/healthz").status_code == 200
