"""Display transport adapters."""

from nyc_transit_departures.adapters.display.json_stream_publisher import JsonStreamPublisher
from nyc_transit_departures.adapters.display.latest_payload_publisher import (
    LatestPayloadPublisher,
)

__all__ = ["JsonStreamPublisher", "LatestPayloadPublisher"]
