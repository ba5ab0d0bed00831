"""Shared fixtures: a small station directory and services frozen at a fixed clock."""

import pytest

from nyc_transit_departures.application.services import (
    AggregationPipeline,
    CountdownCalculator,
    DepartureClassifier,
    FallbackController,
    IdentifierResolver,
)
from nyc_transit_departures.domain.models import Complex, ReferenceData, StationDirectoryEntry

from tests.fakes import NOW


@pytest.fixture
def reference_data() -> ReferenceData:
    """Directory with a handful of real stations plus the aliased complex."""
    entries = [
        StationDirectoryEntry(
            station_id="1",
            complex_id="1",
            gtfs_stop_id="101",
            stop_name="Van Cortlandt Park-242 St",
            line_label="Broadway - 7Av",
            routes=("1",),
            north_label="",
            south_label="Manhattan",
        ),
        StationDirectoryEntry(
            station_id="127",
            complex_id="611",
            gtfs_stop_id="127",
            stop_name="Times Sq-42 St",
            line_label="Broadway - 7Av",
            routes=("1", "2", "3"),
            north_label="Uptown & The Bronx",
            south_label="Downtown & Brooklyn",
        ),
        StationDirectoryEntry(
            station_id="164",
            complex_id="164",
            gtfs_stop_id="A28",
            stop_name="34 St-Penn Station",
            line_label="8th Av - Fulton St",
            routes=("A", "C", "E"),
            north_label="Uptown - Queens",
            south_label="Downtown & Brooklyn",
        ),
        StationDirectoryEntry(
            station_id="447",
            complex_id="281",
            gtfs_stop_id="701",
            stop_name="Flushing-Main St",
            line_label="Flushing",
            routes=("7",),
            north_label="",
            south_label="Manhattan",
        ),
        StationDirectoryEntry(
            station_id="471",
            complex_id="471",
            gtfs_stop_id="726",
            stop_name="34 St-Hudson Yards",
            line_label="Flushing",
            routes=("7",),
            north_label="Queens",
            south_label="",
        ),
        StationDirectoryEntry(
            station_id="900",
            complex_id="900",
            gtfs_stop_id="X01",
            stop_name="Nameless Complex",
            routes=("Q",),
        ),
    ]
    complexes = [
        Complex(complex_id="1", name="Van Cortlandt Park-242 St"),
        Complex(complex_id="611", name="Times Sq-42 St"),
        Complex(complex_id="164", name="34 St-Penn Station"),
        Complex(complex_id="281", name="Superseded Complex"),
        Complex(complex_id="606", name="Flushing-Main St"),
        Complex(complex_id="471", name="34 St-Hudson Yards"),
    ]
    return ReferenceData.build(entries, complexes)


@pytest.fixture
def calculator() -> CountdownCalculator:
    """Countdown calculator frozen at NOW."""
    return CountdownCalculator(clock=lambda: NOW)


@pytest.fixture
def resolver(reference_data: ReferenceData) -> IdentifierResolver:
    """Resolver over the fixture directory."""
    return IdentifierResolver(reference_data)


@pytest.fixture
def classifier(
    resolver: IdentifierResolver, calculator: CountdownCalculator
) -> DepartureClassifier:
    """Classifier using the frozen clock."""
    return DepartureClassifier(resolver, calculator)


@pytest.fixture
def pipeline(classifier: DepartureClassifier) -> AggregationPipeline:
    """Aggregation pipeline using the frozen clock."""
    return AggregationPipeline(classifier)


@pytest.fixture
def controller(pipeline: AggregationPipeline) -> FallbackController:
    """Fallback controller with concurrent per-station fetches."""
    return FallbackController(pipeline)
