"""Solar event models: altitude thresholds, event names and outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SolarAltitude(float, Enum):
    """Altitude of the Sun's centre (degrees) that defines each event.

    The sunrise/sunset value folds in standard refraction and the solar
    semi-diameter; the twilight values are geometric.
    """

    SUNRISE_SUNSET = -0.8333
    CIVIL = -6.0
    NAUTICAL = -12.0
    ASTRONOMICAL = -18.0


class SunEvent(str, Enum):
    """Named solar events of a day, in chronological order."""

    ASTRONOMICAL_DAWN = "astronomical_dawn"
    NAUTICAL_DAWN = "nautical_dawn"
    CIVIL_DAWN = "civil_dawn"
    SUNRISE = "sunrise"
    SOLAR_NOON = "solar_noon"
    SUNSET = "sunset"
    CIVIL_DUSK = "civil_dusk"
    NAUTICAL_DUSK = "nautical_dusk"
    ASTRONOMICAL_DUSK = "astronomical_dusk"

    @property
    def altitude(self) -> SolarAltitude | None:
        """Altitude threshold, or None for solar noon (the transit itself)."""
        return _EVENT_THRESHOLDS.get(self, (None, None))[0]

    @property
    def rising(self) -> bool | None:
        """True for morning events, False for evening events, None for noon."""
        return _EVENT_THRESHOLDS.get(self, (None, None))[1]

    @property
    def label(self) -> str:
        """Human readable name ("civil dawn")."""
        return self.value.replace("_", " ")


_EVENT_THRESHOLDS: dict[SunEvent, tuple[SolarAltitude, bool]] = {
    SunEvent.ASTRONOMICAL_DAWN: (SolarAltitude.ASTRONOMICAL, True),
    SunEvent.NAUTICAL_DAWN: (SolarAltitude.NAUTICAL, True),
    SunEvent.CIVIL_DAWN: (SolarAltitude.CIVIL, True),
    SunEvent.SUNRISE: (SolarAltitude.SUNRISE_SUNSET, True),
    SunEvent.SUNSET: (SolarAltitude.SUNRISE_SUNSET, False),
    SunEvent.CIVIL_DUSK: (SolarAltitude.CIVIL, False),
    SunEvent.NAUTICAL_DUSK: (SolarAltitude.NAUTICAL, False),
    SunEvent.ASTRONOMICAL_DUSK: (SolarAltitude.ASTRONOMICAL, False),
}


@dataclass(frozen=True)
class Occurs:
    """The event happens at `instant`."""

    instant: datetime


@dataclass(frozen=True)
class DoesNotOccur:
    """The Sun never crosses `altitude_deg` in the requested direction.

    Polar night or polar day: the hour-angle equation has no real solution.
    """

    altitude_deg: float
    rising: bool


EventOutcome = Occurs | DoesNotOccur


class SunEvents(BaseModel):
    """All nine solar events of one day for one location.

    Events that do not occur are None (serialized as null) rather than left
    out, so every serialized bundle has the same keys in the same order.
    """

    model_config = ConfigDict(frozen=True)

    astronomical_dawn: datetime | None = Field(
        default=None, description="Sun rising through -18°"
    )
    nautical_dawn: datetime | None = Field(
        default=None, description="Sun rising through -12°"
    )
    civil_dawn: datetime | None = Field(default=None, description="Sun rising through -6°")
    sunrise: datetime | None = Field(default=None, description="Sun rising through -0.8333°")
    solar_noon: datetime = Field(..., description="Solar transit")
    sunset: datetime | None = Field(default=None, description="Sun setting through -0.8333°")
    civil_dusk: datetime | None = Field(default=None, description="Sun setting through -6°")
    nautical_dusk: datetime | None = Field(
        default=None, description="Sun setting through -12°"
    )
    astronomical_dusk: datetime | None = Field(
        default=None, description="Sun setting through -18°"
    )

    def get(self, event: SunEvent | str) -> datetime | None:
        """Return the instant of a named event, or None if it does not occur."""
        return getattr(self, SunEvent(event).value)

    def occurring(self) -> list[tuple[SunEvent, datetime]]:
        """Events that occur on this day, in chronological order."""
        return [
            (event, instant)
            for event in SunEvent
            if (instant := self.get(event)) is not None
        ]
