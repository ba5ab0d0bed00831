"""Optional ordering step for shaped payloads."""

from nyc_transit_departures.domain.models.departure_payload import DeparturePayload


class DepartureSorter:
    """Orders each direction by soonest departure."""

    @staticmethod
    def sort_by_countdown(payload: DeparturePayload) -> DeparturePayload:
        """Return a copy with both directions sorted by countdown (stable)."""
        return payload.model_copy(
            update={
                "downtown": sorted(payload.downtown, key=lambda r: r.countdown_minutes),
                "uptown": sorted(payload.uptown, key=lambda r: r.countdown_minutes),
            }
        )
