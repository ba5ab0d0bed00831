"""Main entry point for the NYC transit departures server."""

import asyncio
import logging
import sys
from pathlib import Path

import aiohttp

from nyc_transit_departures.adapters.config import AppConfig, StationConfigurationLoader
from nyc_transit_departures.adapters.display import LatestPayloadPublisher
from nyc_transit_departures.adapters.mta_api import GtfsDepartureFetcher, MtaHttpClient
from nyc_transit_departures.adapters.reference_data import ReferenceDataLoader
from nyc_transit_departures.adapters.web import DeparturesWebAdapter
from nyc_transit_departures.application.services import DepartureAggregationService
from nyc_transit_departures.domain.errors import ReferenceDataError
from nyc_transit_departures.domain.models import StationConfig

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


async def main() -> None:
    """Main application entry point."""
    config = AppConfig()

    # Reference tables are required for every destination name
    try:
        reference_data = ReferenceDataLoader.load(config.stations_file, config.complexes_file)
    except ReferenceDataError as e:
        logger.error(f"Cannot load reference data: {e}")
        logger.error("Set STATIONS_FILE and COMPLEXES_FILE to the MTA station and complex tables.")
        sys.exit(1)

    # Stations from the TOML file serve requests that do not list any
    default_stations: list[StationConfig] = []
    if config.config_file and Path(config.config_file).exists():
        default_stations = StationConfigurationLoader.load(config)
        logger.info(f"Loaded {len(default_stations)} configured station(s)")

    latest = LatestPayloadPublisher()
    service = DepartureAggregationService.create(
        reference_data,
        publisher=latest,
        countdown_policy=config.countdown_policy,
        preview_limit=config.preview_limit,
        sort_by_countdown=config.sort_by_countdown,
        fetch_timeout_seconds=config.fetch_timeout_seconds,
        concurrent_fallback=config.concurrent_fallback,
    )

    # Create aiohttp session for efficient HTTP connections
    async with aiohttp.ClientSession() as session:

        def fetcher_factory(api_key: str | None) -> GtfsDepartureFetcher:
            http_client = MtaHttpClient(
                session,
                api_key=api_key or config.mta_api_key,
                timeout_seconds=config.mta_api_timeout,
            )
            return GtfsDepartureFetcher(reference_data, http_client)

        web_adapter = DeparturesWebAdapter(
            service, config, fetcher_factory, latest, default_stations=default_stations
        )

        try:
            await web_adapter.start()
        except KeyboardInterrupt:
            logger.info("Shutting down...")
            await web_adapter.stop()


def run() -> None:
    """Synchronous entry point for the server command."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
