"""Exceptions raised by solar event calculations.

Two kinds of failure are kept apart:

- `NoEventError`: the Sun never reaches the requested altitude on that date
  (polar night or polar day). This is an expected, recoverable outcome and
  every accessor that raises it has a non-failing `*_or_none` counterpart.
- `InvalidComputationError`: the numeric pipeline produced a value that cannot
  be turned into an instant. This indicates a bug, not a polar condition.
"""

from __future__ import annotations

from datetime import date


class SunTimesError(Exception):
    """Base exception for solar event calculations."""


class NoEventError(SunTimesError):
    """Raised when a solar event does not occur (polar night/day)."""

    def __init__(
        self,
        event: str,
        date: date,
        altitude_deg: float,
        rising: bool,
    ):
        super().__init__(
            f"No {event} occurs on this date for this location (polar night/day)"
        )
        self.event = event
        self.date = date
        self.altitude_deg = altitude_deg
        self.rising = rising


class InvalidComputationError(SunTimesError, ArithmeticError):
    """Raised when a Julian Day cannot be converted to an instant."""

    pass
