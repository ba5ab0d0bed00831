"""Resolves station-scheme ids to station complexes."""

from nyc_transit_departures.domain.models.reference_data import ReferenceData

# Complex ids replaced before the name lookup (duplicated complex in the reference data)
COMPLEX_ALIASES: dict[str, str] = {"281": "606"}


class IdentifierResolver:
    """Maps station ids to complex ids and complex ids to display names."""

    def __init__(self, reference_data: ReferenceData) -> None:
        self._complex_ids = {
            station_id: entry.complex_id for station_id, entry in reference_data.stations.items()
        }
        self._complexes = reference_data.complexes

    def resolve(self, station_id: str | int) -> str | None:
        """Return the complex id for a station id, or None if the station is unknown."""
        return self._complex_ids.get(str(station_id))

    def complex_name(self, complex_id: str | int) -> str | None:
        """Return the display name of a complex, or None if it is unknown."""
        complex_id = str(complex_id)
        complex_id = COMPLEX_ALIASES.get(complex_id, complex_id)
        complex_ = self._complexes.get(complex_id)
        return complex_.name if complex_ is not None else None

    def destination_name(self, station_id: str | int) -> str | None:
        """Resolve a station id straight to its complex display name."""
        complex_id = self.resolve(station_id)
        if complex_id is None:
            return None
        return self.complex_name(complex_id)
