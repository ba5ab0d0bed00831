"""Payload publisher port."""

from typing import Protocol

from nyc_transit_departures.domain.models.departure_payload import DeparturePayload


class PayloadPublisher(Protocol):
    """Port for delivering a finished payload to the display transport."""

    async def publish(self, payload: DeparturePayload) -> None:
        """Deliver the payload of one completed cycle."""
        ...
