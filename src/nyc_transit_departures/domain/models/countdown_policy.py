"""Countdown policy domain model."""

from enum import Enum


class CountdownPolicy(str, Enum):
    """How minute differences outside the one-hour display window are treated."""

    WRAP = "wrap"  # Remainder by 60, like a minutes-past-the-hour display
    CLAMP = "clamp"  # Limited to -59..59
    EXCLUDE = "exclude"  # Departures an hour or more away are dropped
