"""Domain exceptions."""


class DepartureFetchError(Exception):
    """The real-time provider could not deliver departures."""


class UnknownStationError(DepartureFetchError):
    """A requested station id is not present in the station directory."""

    def __init__(self, station_id: str) -> None:
        super().__init__(f"Unknown station id {station_id!r}")
        self.station_id = station_id


class FeedRequestError(DepartureFetchError):
    """A GTFS-realtime feed request failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ReferenceDataError(Exception):
    """Reference tables are missing or cannot be parsed."""
