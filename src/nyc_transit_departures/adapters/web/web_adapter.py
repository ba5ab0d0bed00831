"""Starlette web adapter exposing the aggregation cycle over HTTP."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from nyc_transit_departures.adapters.config import AppConfig, StationConfigurationLoader
from nyc_transit_departures.adapters.web.departure_request import DepartureRequest
from nyc_transit_departures.adapters.web.rate_limit_middleware import RateLimitMiddleware

if TYPE_CHECKING:
    import uvicorn

    from nyc_transit_departures.adapters.display import LatestPayloadPublisher
    from nyc_transit_departures.domain.models import StationConfig
    from nyc_transit_departures.domain.ports import DepartureAggregator, DepartureFetcher

logger = logging.getLogger(__name__)

DEPARTURES_PATH = "/api/departures"


class DeparturesWebAdapter:
    """Serves `POST /api/departures`, `GET /api/departures/latest` and `GET /healthz`."""

    def __init__(
        self,
        aggregator: DepartureAggregator,
        config: AppConfig,
        fetcher_factory: Callable[[str | None], DepartureFetcher],
        latest: LatestPayloadPublisher,
        default_stations: Sequence[StationConfig] = (),
    ) -> None:
        """Initialize the web adapter.

        Args:
            aggregator: Runs one aggregation cycle per request.
            config: Application configuration.
            fetcher_factory: Builds a fetcher for the API key given in a request (or None).
            latest: Publisher holding the payload of the most recent cycle.
            default_stations: Stations used when a request does not list any.
        """
        if not isinstance(config, AppConfig):
            raise TypeError("config must be an AppConfig instance")
        self.aggregator = aggregator
        self.config = config
        self.fetcher_factory = fetcher_factory
        self.latest = latest
        self.default_stations = list(default_stations)
        self._server: uvicorn.Server | None = None

    async def post_departures(self, request: Request) -> Response:
        """Run one cycle for the stations in the request body."""
        try:
            body = DepartureRequest.model_validate(await request.json())
        except ValueError as e:
            return JSONResponse({"error": f"Invalid request: {e}"}, status_code=422)

        if body.stations:
            station_configs = StationConfigurationLoader.from_entries(body.stations)
        else:
            station_configs = self.default_stations
        if not station_configs:
            return JSONResponse({"error": "No valid stations in request"}, status_code=422)

        logger.info(f"Departures requested for {len(station_configs)} station(s)")
        payload = await self.aggregator.run_cycle(
            station_configs,
            self.fetcher_factory(body.api_key),
            preview_mode=body.preview_mode(self.config.preview_mode),
        )
        return JSONResponse(payload.to_wire())

    async def get_latest(self, _request: Request) -> Response:
        """Return the payload of the most recent cycle."""
        if self.latest.payload is None:
            return JSONResponse({"error": "No departures fetched yet"}, status_code=404)
        return JSONResponse(self.latest.payload.to_wire())

    async def healthz(self, _request: Any) -> Response:
        """Health check endpoint for load balancers and monitoring."""
        return Response(content="Ok", media_type="text/plain")

    def build_app(self) -> Starlette:
        """Build the ASGI application."""
        return Starlette(
            routes=[
                Route(DEPARTURES_PATH, self.post_departures, methods=["POST"]),
                Route(f"{DEPARTURES_PATH}/latest", self.get_latest, methods=["GET"]),
                Route("/healthz", self.healthz, methods=["GET"]),
            ],
            middleware=[
                Middleware(
                    RateLimitMiddleware,
                    requests_per_minute=self.config.rate_limit_per_minute,
                    limited_paths=(DEPARTURES_PATH,),
                )
            ],
        )

    async def start(self) -> None:
        """Start the web server."""
        import uvicorn

        server_config = uvicorn.Config(
            self.build_app(),
            host=self.config.host,
            port=self.config.port,
            log_level="info",
        )
        self._server = uvicorn.Server(server_config)
        await self._server.serve()

    async def stop(self) -> None:
        """Stop the web server."""
        if self._server:
            self._server.should_exit = True
