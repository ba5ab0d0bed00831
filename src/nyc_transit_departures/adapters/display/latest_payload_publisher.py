"""Publisher that keeps the most recent payload in memory."""

import logging
from datetime import UTC, datetime

from nyc_transit_departures.domain.models.departure_payload import DeparturePayload
from nyc_transit_departures.domain.ports.payload_publisher import PayloadPublisher

logger = logging.getLogger(__name__)


class LatestPayloadPublisher(PayloadPublisher):
    """Holds the last published payload for polling display clients."""

    def __init__(self) -> None:
        self.payload: DeparturePayload | None = None
        self.published_at: datetime | None = None

    async def publish(self, payload: DeparturePayload) -> None:
        """Replace the stored payload."""
        self.payload = payload
        self.published_at = datetime.now(UTC)
        logger.debug(f"Stored payload for {len(payload.stations)} station(s)")
