"""Departure fetcher port."""

from collections.abc import Sequence
from typing import Any, Protocol


class DepartureFetcher(Protocol):
    """Port for fetching raw departures from the real-time provider."""

    async def fetch(self, station_ids: Sequence[str]) -> list[dict[str, Any]] | dict[str, Any]:
        """Fetch one station response per id, in request order.

        Raises on provider or transport failure.
        """
        ...
