"""Failure record domain model."""

from pydantic import BaseModel, ConfigDict, Field


class FailureRecord(BaseModel):
    """A station whose departures could not be fetched."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    station_id: str = Field(serialization_alias="stationId")
    error_message: str = Field(serialization_alias="error")
