"""Sunrise, sunset, solar noon and twilight times for any location on Earth."""

from sun_times.astronomy.calculator import SolarPositionEngine
from sun_times.exceptions import InvalidComputationError, NoEventError, SunTimesError
from sun_times.models import (
    Coordinates,
    DoesNotOccur,
    EventOutcome,
    Occurs,
    SolarAltitude,
    SunEvent,
    SunEvents,
)

__version__ = "0.1.0"

__all__ = [
    "SolarPositionEngine",
    "Coordinates",
    "SolarAltitude",
    "SunEvent",
    "SunEvents",
    "Occurs",
    "DoesNotOccur",
    "EventOutcome",
    "SunTimesError",
    "NoEventError",
    "InvalidComputationError",
]
