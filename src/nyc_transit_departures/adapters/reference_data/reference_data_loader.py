"""Loads the station directory and complex tables from disk."""

import csv
import io
import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from nyc_transit_departures.domain.errors import ReferenceDataError
from nyc_transit_departures.domain.models.complex import Complex
from nyc_transit_departures.domain.models.reference_data import ReferenceData
from nyc_transit_departures.domain.models.station_directory_entry import StationDirectoryEntry

logger = logging.getLogger(__name__)

# MTA Stations.csv column names
STATION_ID = "Station ID"
COMPLEX_ID = "Complex ID"
GTFS_STOP_ID = "GTFS Stop ID"
LINE = "Line"
STOP_NAME = "Stop Name"
DAYTIME_ROUTES = "Daytime Routes"
NORTH_LABEL = "North Direction Label"
SOUTH_LABEL = "South Direction Label"


def _parse_routes(value: Any) -> tuple[str, ...]:
    """Daytime routes are space separated in the CSV and a list in the JSON export."""
    if isinstance(value, list | tuple):
        return tuple(str(route).strip() for route in value if str(route).strip())
    if isinstance(value, str):
        return tuple(value.split())
    return ()


def _parse_station_row(row: Mapping[str, Any]) -> StationDirectoryEntry | None:
    """Parse one directory row, or None if it lacks the station or complex id."""
    station_id = str(row.get(STATION_ID) or "").strip()
    complex_id = str(row.get(COMPLEX_ID) or "").strip()
    if not station_id or not complex_id:
        return None

    return StationDirectoryEntry(
        station_id=station_id,
        complex_id=complex_id,
        gtfs_stop_id=str(row.get(GTFS_STOP_ID) or "").strip(),
        stop_name=str(row.get(STOP_NAME) or "").strip(),
        line_label=str(row.get(LINE) or "").strip(),
        routes=_parse_routes(row.get(DAYTIME_ROUTES)),
        north_label=str(row.get(NORTH_LABEL) or "").strip(),
        south_label=str(row.get(SOUTH_LABEL) or "").strip(),
    )


def _parse_complexes(data: Any) -> list[Complex]:
    """Parse complexes from an object keyed by id or an array of records."""
    if isinstance(data, Mapping):
        items: Iterable[tuple[str, Any]] = data.items()
    elif isinstance(data, list):
        items = (
            (str(item.get("complexId", "")), item) for item in data if isinstance(item, Mapping)
        )
    else:
        raise ReferenceDataError("Complex table must be a JSON object or array")

    complexes = []
    for complex_id, value in items:
        if not complex_id or not isinstance(value, Mapping) or not value.get("name"):
            continue
        complexes.append(Complex(complex_id=str(complex_id), name=str(value["name"])))
    return complexes


class ReferenceDataLoader:
    """Reads the reference tables once at startup; any problem is fatal."""

    @staticmethod
    def _read_text(path: Path) -> str:
        if not path.exists():
            raise ReferenceDataError(f"Reference file not found: {path}")
        try:
            return path.read_text(encoding="utf-8-sig")
        except OSError as e:
            raise ReferenceDataError(f"Cannot read reference file {path}: {e}") from e

    @staticmethod
    def _read_json(path: Path) -> Any:
        text = ReferenceDataLoader._read_text(path)
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ReferenceDataError(f"Invalid JSON in {path}: {e}") from e

    @staticmethod
    def load_stations(path: str | Path) -> list[StationDirectoryEntry]:
        """Load the station directory from CSV or a JSON array."""
        path = Path(path)
        if path.suffix.lower() == ".json":
            rows = ReferenceDataLoader._read_json(path)
            if not isinstance(rows, list):
                raise ReferenceDataError(f"Station directory {path} must be a JSON array")
        else:
            text = ReferenceDataLoader._read_text(path)
            rows = list(csv.DictReader(io.StringIO(text)))
            if rows and STATION_ID not in rows[0]:
                raise ReferenceDataError(f"Station directory {path} has no '{STATION_ID}' column")

        entries = []
        for row in rows:
            entry = _parse_station_row(row) if isinstance(row, Mapping) else None
            if entry is not None:
                entries.append(entry)

        if not entries:
            raise ReferenceDataError(f"Station directory {path} contains no stations")
        return entries

    @staticmethod
    def load_complexes(path: str | Path) -> list[Complex]:
        """Load the complex table from JSON."""
        path = Path(path)
        complexes = _parse_complexes(ReferenceDataLoader._read_json(path))
        if not complexes:
            raise ReferenceDataError(f"Complex table {path} contains no complexes")
        return complexes

    @staticmethod
    def load(stations_file: str | Path, complexes_file: str | Path) -> ReferenceData:
        """Load both tables into an immutable ReferenceData."""
        entries = ReferenceDataLoader.load_stations(stations_file)
        complexes = ReferenceDataLoader.load_complexes(complexes_file)
        logger.info(f"Loaded {len(entries)} station(s) and {len(complexes)} complex(es)")
        return ReferenceData.build(entries, complexes)
