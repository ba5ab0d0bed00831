"""Shapes aggregation results for the display transport."""

from collections.abc import Iterable, Sequence

from nyc_transit_departures.domain.models.aggregation_result import AggregationResult
from nyc_transit_departures.domain.models.departure_payload import DeparturePayload
from nyc_transit_departures.domain.models.departure_record import DepartureRecord

DEFAULT_PREVIEW_LIMIT = 3


class ResultShaper:
    """Filters out departed trains and applies preview truncation."""

    def __init__(self, preview_limit: int = DEFAULT_PREVIEW_LIMIT) -> None:
        self.preview_limit = preview_limit

    @staticmethod
    def filter_upcoming(records: Iterable[DepartureRecord]) -> list[DepartureRecord]:
        """Keep only records with a positive countdown."""
        return [record for record in records if record.countdown_minutes > 0]

    def shape(
        self,
        result: AggregationResult,
        station_ids: Sequence[str],
        preview_mode: bool = False,
    ) -> DeparturePayload:
        """Build the payload for one cycle."""
        downtown = self.filter_upcoming(result.downtown)
        uptown = self.filter_upcoming(result.uptown)

        if preview_mode:
            downtown = downtown[: self.preview_limit]
            uptown = uptown[: self.preview_limit]

        return DeparturePayload(
            stations=[str(station_id) for station_id in station_ids],
            downtown=downtown,
            uptown=uptown,
            failures=list(result.failures),
        )
