"""Domain models for solar event calculations."""

from sun_times.models.location import Coordinates
from sun_times.models.events import (
    DoesNotOccur,
    EventOutcome,
    Occurs,
    SolarAltitude,
    SunEvent,
    SunEvents,
)

__all__ = [
    # Location
    "Coordinates",
    # Events
    "SolarAltitude",
    "SunEvent",
    "SunEvents",
    "Occurs",
    "DoesNotOccur",
    "EventOutcome",
]
