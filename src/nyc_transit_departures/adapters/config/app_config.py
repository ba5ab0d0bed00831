"""12-factor configuration adapter using environment variables and TOML config."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nyc_transit_departures.domain.models.countdown_policy import CountdownPolicy


def _normalize_display_type(value: str) -> str:
    """Lower-case and validate a display type."""
    if value.lower() not in ("list", "marquee"):
        raise ValueError("display_type must be either 'list' or 'marquee'")
    return value.lower()


def _normalize_countdown_policy(value: Any) -> Any:
    """Lower-case and validate a countdown policy name."""
    if isinstance(value, str):
        if value.lower() not in {policy.value for policy in CountdownPolicy}:
            raise ValueError("countdown_policy must be one of 'wrap', 'clamp' or 'exclude'")
        return value.lower()
    return value


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8000, description="Port to bind the server to")

    # MTA API configuration
    mta_api_key: str | None = Field(
        default=None, description="API key sent as x-api-key to the MTA GTFS-realtime feeds"
    )
    mta_api_timeout: int = Field(
        default=10, description="Timeout for a single MTA feed request in seconds"
    )
    fetch_timeout_seconds: float | None = Field(
        default=None,
        description="Upper bound for one bulk or per-station fetch in seconds",
    )
    concurrent_fallback: bool = Field(
        default=True,
        description="Fetch stations concurrently when the combined request fails",
    )

    # Reference data
    stations_file: str = Field(
        default="data/Stations.csv",
        description="Station directory (MTA Stations.csv or the same rows as a JSON array)",
    )
    complexes_file: str = Field(
        default="data/complexes.json",
        description="Complex table mapping complex ids to names",
    )

    # Display configuration
    display_type: str = Field(
        default="list", description="Display type: 'list' or 'marquee' (preview mode)"
    )
    preview_limit: int = Field(
        default=3, description="Departures per direction shown in marquee mode"
    )
    countdown_policy: CountdownPolicy = Field(
        default=CountdownPolicy.WRAP,
        description="Arrivals an hour or more away: 'wrap', 'clamp' or 'exclude'",
    )
    sort_by_countdown: bool = Field(
        default=False, description="Order each direction by soonest departure"
    )

    # Rate limiting configuration
    rate_limit_per_minute: int = Field(
        default=60,
        description="Maximum number of requests allowed per IP address per minute",
    )

    # TOML config file path
    config_file: str | None = Field(
        default="config.toml",
        description="Path to TOML configuration file with the monitored stations",
    )

    @field_validator("display_type")
    @classmethod
    def validate_display_type(cls, v: str) -> str:
        """Validate display type is either 'list' or 'marquee'."""
        return _normalize_display_type(v)

    @field_validator("countdown_policy", mode="before")
    @classmethod
    def validate_countdown_policy(cls, v: Any) -> Any:
        """Validate the countdown policy name."""
        return _normalize_countdown_policy(v)

    @property
    def preview_mode(self) -> bool:
        """Whether each direction is truncated to the preview limit."""
        return self.display_type == "marquee"

    def _load_toml_data(self) -> dict[str, Any]:
        """Load and parse TOML file, updating display and API settings."""
        if not self.config_file:
            raise ValueError("config_file must be set to load stations configuration")

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        display = toml_data.get("display", {})
        if "display_type" in display:
            self.display_type = _normalize_display_type(display["display_type"])
        if "preview_limit" in display:
            self.preview_limit = int(display["preview_limit"])
        if "countdown_policy" in display:
            self.countdown_policy = CountdownPolicy(
                _normalize_countdown_policy(display["countdown_policy"])
            )
        if "sort_by_countdown" in display:
            self.sort_by_countdown = bool(display["sort_by_countdown"])

        api_config = toml_data.get("api", {})
        if api_config.get("api_key") and not self.mta_api_key:
            self.mta_api_key = api_config["api_key"]

        return toml_data

    def get_stations_config(self) -> list[dict[str, Any]]:
        """Parse and return stations configuration as a list of dicts from TOML file."""
        toml_data = self._load_toml_data()

        stations = toml_data.get("stations", [])
        if not isinstance(stations, list):
            raise ValueError("TOML config 'stations' must be a list")
        # Filter out stations with placeholder IDs
        return [
            s
            for s in stations
            if isinstance(s, dict) and str(s.get("station_id", "")).find("XXX") == -1
        ]
