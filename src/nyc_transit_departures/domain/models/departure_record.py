"""Departure record domain model."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class DepartureRecord:
    """A classified departure ready for display."""

    route_id: str
    countdown_minutes: int  # Minutes until the user has to leave; may be zero or negative
    destination_name: str
    walking_time_minutes: int

    def to_wire(self) -> dict[str, Any]:
        """Render in the display transport's format."""
        return {
            "routeId": self.route_id,
            "time": self.countdown_minutes,
            "destination": self.destination_name,
            "walkingTime": self.walking_time_minutes,
        }
