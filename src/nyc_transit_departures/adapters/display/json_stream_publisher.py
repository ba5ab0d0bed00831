"""Publisher that writes payloads as JSON to a text stream."""

import json
import sys
from typing import TextIO

from nyc_transit_departures.domain.models.departure_payload import DeparturePayload
from nyc_transit_departures.domain.ports.payload_publisher import PayloadPublisher


class JsonStreamPublisher(PayloadPublisher):
    """Writes one JSON document per payload."""

    def __init__(self, stream: TextIO | None = None, indent: int | None = 2) -> None:
        self._stream = stream
        self._indent = indent

    async def publish(self, payload: DeparturePayload) -> None:
        """Write the wire form of the payload followed by a newline."""
        stream = self._stream or sys.stdout
        stream.write(json.dumps(payload.to_wire(), indent=self._indent, ensure_ascii=False))
        stream.write("\n")
        stream.flush()
