"""Station configuration loader."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from nyc_transit_departures.adapters.config.app_config import AppConfig
from nyc_transit_departures.domain.models.station_config import StationConfig

logger = logging.getLogger(__name__)

# Accepted spellings, first match wins: TOML (snake_case), dashboard (camelCase)
STATION_ID_KEYS = ("station_id", "stationId")
WALKING_TIME_KEYS = ("walking_time", "walking_time_minutes", "walkingTime", "walkingTimeMinutes")
DIRECTION_KEYS = ("dir", "direction")
UPTOWN_KEYS = ("uptown", "upTown")
DOWNTOWN_KEYS = ("downtown", "downTown")


def _first(data: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _parse_walking_time(value: Any, station_id: str) -> int:
    """Coerce walking time to a non-negative integer."""
    if value is None:
        return 0
    try:
        minutes = int(value)
    except (ValueError, TypeError):
        logger.warning(f"Invalid walking time {value!r} for station {station_id}, using 0")
        return 0
    return max(0, minutes)


def _parse_flag(container: Mapping[str, Any], keys: Iterable[str]) -> bool:
    """Read a direction flag; missing flags default to interested."""
    value = _first(container, keys)
    return True if value is None else bool(value)


class StationConfigurationLoader:
    """Loads station configurations from app config or request payloads."""

    @staticmethod
    def parse_entry(entry: Mapping[str, Any]) -> StationConfig | None:
        """Parse one station entry, or None if it has no station id."""
        station_id = _first(entry, STATION_ID_KEYS)
        if station_id is None or str(station_id).strip() == "":
            return None
        station_id = str(station_id).strip()

        direction = _first(entry, DIRECTION_KEYS)
        if not isinstance(direction, Mapping):
            # Flags may also sit directly on the entry
            direction = entry

        return StationConfig(
            station_id=station_id,
            walking_time_minutes=_parse_walking_time(
                _first(entry, WALKING_TIME_KEYS), station_id
            ),
            interested_uptown=_parse_flag(direction, UPTOWN_KEYS),
            interested_downtown=_parse_flag(direction, DOWNTOWN_KEYS),
        )

    @staticmethod
    def from_entries(entries: Iterable[Any]) -> list[StationConfig]:
        """Parse station entries, skipping anything without a station id."""
        station_configs: list[StationConfig] = []
        for entry in entries:
            if not isinstance(entry, Mapping):
                continue
            station_config = StationConfigurationLoader.parse_entry(entry)
            if station_config is None:
                logger.warning(f"Skipping station entry without station id: {entry}")
                continue
            station_configs.append(station_config)
        return station_configs

    @staticmethod
    def load(config: AppConfig) -> list[StationConfig]:
        """Load station configurations from the TOML file referenced by app config."""
        return StationConfigurationLoader.from_entries(config.get_stations_config())
