"""Raw departure domain model."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RawDeparture:
    """A single departure as reported by the real-time provider."""

    route_id: str
    destination_station_id: str
    arrival_unix_time: int

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "RawDeparture":
        """Build from a provider dict (`routeId`, `destinationStationId`, `time`).

        Raises:
            ValueError: If the payload is not a mapping or a field is missing or invalid.
        """
        if not isinstance(payload, Mapping):
            raise ValueError(f"Departure must be a mapping, got {type(payload).__name__}")

        destination = payload.get("destinationStationId")
        if destination is None:
            raise ValueError("Departure has no destinationStationId")

        time_value = payload.get("time")
        if time_value is None or isinstance(time_value, bool):
            raise ValueError("Departure has no arrival time")

        try:
            arrival = int(time_value)
        except (TypeError, ValueError, OverflowError) as e:
            raise ValueError(f"Invalid arrival time {time_value!r}") from e

        return cls(
            route_id=str(payload.get("routeId", "")),
            destination_station_id=str(destination),
            arrival_unix_time=arrival,
        )
