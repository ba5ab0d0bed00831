"""Inbound request model for the departures endpoint."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DepartureRequest(BaseModel):
    """Body of `POST /api/departures`."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    stations: list[dict[str, Any]] = Field(default_factory=list)
    api_key: str | None = Field(default=None, alias="apiKey")
    display_type: str | None = Field(default=None, alias="displayType")

    def preview_mode(self, default: bool) -> bool:
        """Marquee displays get the preview; without a display type the default applies."""
        if self.display_type is None:
            return default
        return self.display_type.lower() == "marquee"
