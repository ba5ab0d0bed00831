"""Station complex domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Complex:
    """A named station complex, possibly grouping several stations."""

    complex_id: str
    name: str
