"""Countdown calculation for departures."""

import time
from collections.abc import Callable

from nyc_transit_departures.domain.models.countdown_policy import CountdownPolicy

MINUTES_PER_HOUR = 60


class CountdownCalculator:
    """Converts arrival timestamps into minutes the user has left to catch a train."""

    def __init__(
        self,
        policy: CountdownPolicy = CountdownPolicy.WRAP,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize the calculator.

        Args:
            policy: How minute differences of an hour or more are folded.
            clock: Returns the current unix time in seconds. Defaults to `time.time`.
        """
        self.policy = policy
        self._clock = clock or time.time

    def minutes_until(self, arrival_unix_time: int) -> int:
        """Whole minutes between now and the arrival, rounded down."""
        now = round(self._clock())
        return (arrival_unix_time - now) // 60

    def fold(self, minutes: int) -> int | None:
        """Fold a minute difference into the near-term display window."""
        if self.policy is CountdownPolicy.CLAMP:
            limit = MINUTES_PER_HOUR - 1
            return max(-limit, min(limit, minutes))
        if self.policy is CountdownPolicy.EXCLUDE:
            return minutes if abs(minutes) < MINUTES_PER_HOUR else None
        # Sign-preserving remainder: 75 -> 15, -3 -> -3
        # Two-digit truncation is not applied, so -15 stays -15 instead of becoming 15
        if minutes < 0:
            return -(-minutes % MINUTES_PER_HOUR)
        return minutes % MINUTES_PER_HOUR

    def countdown(self, arrival_unix_time: int, walking_time_minutes: int) -> int | None:
        """Minutes until departure minus walking time.

        Returns None only when the policy excludes the departure. Zero and
        negative values are valid results.
        """
        folded = self.fold(self.minutes_until(arrival_unix_time))
        if folded is None:
            return None
        return folded - walking_time_minutes
