"""Station configuration domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StationConfig:
    """Configuration for a station to monitor."""

    station_id: str  # Station-scheme identifier used by the real-time provider
    walking_time_minutes: int = 0  # Subtracted from every countdown at this station
    interested_uptown: bool = True
    interested_downtown: bool = True
