"""Reference data domain model."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from nyc_transit_departures.domain.models.complex import Complex
from nyc_transit_departures.domain.models.station_directory_entry import StationDirectoryEntry


@dataclass(frozen=True)
class ReferenceData:
    """Read-only station directory and complex tables, loaded once at startup."""

    stations: Mapping[str, StationDirectoryEntry]
    complexes: Mapping[str, Complex]
    stations_by_gtfs_stop: Mapping[str, StationDirectoryEntry] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def build(
        cls, entries: Iterable[StationDirectoryEntry], complexes: Iterable[Complex]
    ) -> "ReferenceData":
        """Build from entries; later duplicates of a station or complex id win."""
        stations = {entry.station_id: entry for entry in entries}
        by_gtfs_stop = {
            entry.gtfs_stop_id: entry for entry in stations.values() if entry.gtfs_stop_id
        }
        complex_map = {complex_.complex_id: complex_ for complex_ in complexes}
        return cls(
            stations=MappingProxyType(stations),
            complexes=MappingProxyType(complex_map),
            stations_by_gtfs_stop=MappingProxyType(by_gtfs_stop),
        )

    def find_by_gtfs_stop_id(self, gtfs_stop_id: str) -> StationDirectoryEntry | None:
        """Find the station for a GTFS stop id; a trailing N/S platform suffix is ignored."""
        if gtfs_stop_id[-1:] in ("N", "S"):
            gtfs_stop_id = gtfs_stop_id[:-1]
        return self.stations_by_gtfs_stop.get(gtfs_stop_id)
