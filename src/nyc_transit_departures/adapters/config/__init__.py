"""Configuration adapters."""

from nyc_transit_departures.adapters.config.app_config import AppConfig
from nyc_transit_departures.adapters.config.station_configuration_loader import (
    StationConfigurationLoader,
)

__all__ = ["AppConfig", "StationConfigurationLoader"]
