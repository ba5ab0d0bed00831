"""HTTP client for the MTA GTFS-realtime feeds."""

import logging
from typing import TYPE_CHECKING

import aiohttp

from nyc_transit_departures.adapters.api_request_logger import log_api_request
from nyc_transit_departures.adapters.mta_api.constants import API_KEY_HEADER, FEED_URLS
from nyc_transit_departures.domain.errors import FeedRequestError

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession


class MtaHttpClient:
    """Downloads raw GTFS-realtime protobuf feeds."""

    def __init__(
        self,
        session: "ClientSession",
        api_key: str | None = None,
        timeout_seconds: float = 10,
    ) -> None:
        """Initialize with a shared aiohttp session.

        Args:
            session: aiohttp session used for all feed requests.
            api_key: Optional MTA API key sent as x-api-key.
            timeout_seconds: Total timeout per feed request.
        """
        self._session = session
        self._api_key = api_key
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    def _headers(self) -> dict[str, str]:
        return {API_KEY_HEADER: self._api_key} if self._api_key else {}

    async def fetch_feed(self, feed_name: str) -> bytes:
        """Fetch one feed and return its protobuf body.

        Raises:
            FeedRequestError: On unknown feed, transport error or non-200 status.
        """
        url = FEED_URLS.get(feed_name)
        if url is None:
            raise FeedRequestError(f"Unknown MTA feed {feed_name!r}")

        headers = self._headers()
        log_api_request("GET", url, headers)

        try:
            async with self._session.get(url, headers=headers, timeout=self._timeout) as response:
                if response.status != 200:
                    body = await response.text()
                    if response.status in (401, 403):
                        logger.error(
                            f"MTA feed {feed_name} rejected the API key (HTTP {response.status})"
                        )
                    raise FeedRequestError(
                        f"MTA feed {feed_name} returned HTTP {response.status}: {body[:200]}",
                        status_code=response.status,
                    )
                return await response.read()
        except TimeoutError as e:
            raise FeedRequestError(f"Timed out fetching MTA feed {feed_name}") from e
        except aiohttp.ClientError as e:
            raise FeedRequestError(f"Error fetching MTA feed {feed_name}: {e}") from e
