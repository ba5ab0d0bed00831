"""Reference data adapters."""

from nyc_transit_departures.adapters.reference_data.reference_data_loader import (
    ReferenceDataLoader,
)

__all__ = ["ReferenceDataLoader"]
