"""Station directory entry domain model."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class StationDirectoryEntry:
    """Static metadata for one station, keyed by its station-scheme id."""

    station_id: str
    complex_id: str
    gtfs_stop_id: str
    stop_name: str
    line_label: str = ""
    routes: tuple[str, ...] = field(default_factory=tuple)
    north_label: str = ""
    south_label: str = ""
