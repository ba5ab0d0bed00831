"""Departure payload domain model."""

from typing import Any

from pydantic import BaseModel, ConfigDict

from nyc_transit_departures.domain.models.departure_record import DepartureRecord
from nyc_transit_departures.domain.models.failure_record import FailureRecord


class DeparturePayload(BaseModel):
    """Shaped result of one cycle, delivered to the display transport."""

    model_config = ConfigDict(frozen=True)

    stations: list[str]
    downtown: list[DepartureRecord]
    uptown: list[DepartureRecord]
    failures: list[FailureRecord] = []

    @property
    def has_failures(self) -> bool:
        """Whether any station failed during this cycle."""
        return bool(self.failures)

    def to_wire(self) -> dict[str, Any]:
        """Render the payload; `errors` is only present when a station failed."""
        wire: dict[str, Any] = {
            "stations": list(self.stations),
            "data": [
                {"downTown": [record.to_wire() for record in self.downtown]},
                {"upTown": [record.to_wire() for record in self.uptown]},
            ],
        }
        if self.failures:
            wire["errors"] = [failure.model_dump(by_alias=True) for failure in self.failures]
        return wire
