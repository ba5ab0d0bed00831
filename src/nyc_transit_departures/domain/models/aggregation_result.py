"""Aggregation result domain model."""

from dataclasses import dataclass

from nyc_transit_departures.domain.models.departure_record import DepartureRecord
from nyc_transit_departures.domain.models.failure_record import FailureRecord


@dataclass(frozen=True)
class AggregationResult:
    """Outcome of one aggregation cycle, before shaping."""

    uptown: tuple[DepartureRecord, ...] = ()
    downtown: tuple[DepartureRecord, ...] = ()
    failures: tuple[FailureRecord, ...] = ()

    def merge(self, other: "AggregationResult") -> "AggregationResult":
        """Return a result with `other` appended after this one."""
        return AggregationResult(
            uptown=self.uptown + other.uptown,
            downtown=self.downtown + other.downtown,
            failures=self.failures + other.failures,
        )
