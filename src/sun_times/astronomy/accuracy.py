"""Accuracy checks for the simplified solar model.

Two independent yardsticks are provided:

- `sun_altitude` asks astropy where the Sun really is at a given instant. At a
  correctly computed event the geometric altitude should sit close to the
  event's threshold (e.g. -0.8333° at sunrise, -6° at civil dawn).
- `REFERENCE_CASES` holds published NOAA Solar Calculator times for a few
  cities; `compare_with_reference` reports how far the engine is from them.

astropy is run with IERS auto-download disabled so that checks never touch
the network; instants must fall inside the bundled IERS tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import NamedTuple
from zoneinfo import ZoneInfo

from astropy import units as u
from astropy.coordinates import AltAz, EarthLocation, get_sun
from astropy.time import Time
from astropy.utils import iers

from sun_times.astronomy.calculator import SolarPositionEngine
from sun_times.models.events import SunEvent
from sun_times.models.location import Coordinates


@dataclass
class AltitudeResidual:
    """Difference between astropy's sun altitude and an event's threshold."""

    event: SunEvent
    instant: datetime
    target_deg: float
    actual_deg: float

    @property
    def residual_deg(self) -> float:
        return self.actual_deg - self.target_deg


class ReferenceCase(NamedTuple):
    """Published sun times for a city and date (local wall-clock times)."""

    name: str
    latitude: float
    longitude: float
    date: date
    timezone: str
    sunrise: datetime
    sunset: datetime
    solar_noon: datetime

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(latitude=self.latitude, longitude=self.longitude)


@dataclass
class ReferenceComparison:
    """Engine results next to the reference times for one case."""

    case: ReferenceCase
    calculated: dict[SunEvent, datetime]

    def difference(self, event: SunEvent) -> timedelta:
        """Absolute difference between calculated and reference times."""
        reference = getattr(self.case, event.value)
        return abs(self.calculated[event] - reference)

    @property
    def max_difference(self) -> timedelta:
        return max(self.difference(event) for event in self.calculated)


def _reference(
    name: str,
    latitude: float,
    longitude: float,
    zone: str,
    day: date,
    sunrise: tuple[int, int, int],
    sunset: tuple[int, int, int],
    solar_noon: tuple[int, int, int],
) -> ReferenceCase:
    tz = ZoneInfo(zone)

    def at(hms: tuple[int, int, int]) -> datetime:
        return datetime(day.year, day.month, day.day, *hms, tzinfo=tz)

    return ReferenceCase(
        name, latitude, longitude, day, zone, at(sunrise), at(sunset), at(solar_noon)
    )


# NOAA Solar Calculator, https://gml.noaa.gov/grad/solcalc/
REFERENCE_CASES: list[ReferenceCase] = [
    _reference(
        "New York, USA", 40.72, -74.02, "America/New_York", date(2025, 11, 5),
        (6, 31, 0), (16, 47, 0), (11, 39, 37),
    ),
    _reference(
        "London, UK", 51.5, -0.13, "Europe/London", date(2025, 11, 5),
        (7, 1, 0), (16, 26, 0), (11, 44, 3),
    ),
    _reference(
        "Tokyo, Japan", 35.7, 139.77, "Asia/Tokyo", date(2025, 11, 5),
        (6, 7, 0), (16, 42, 0), (11, 24, 27),
    ),
    _reference(
        "Sydney, Australia", -33.87, 151.22, "Australia/Sydney", date(2025, 11, 5),
        (5, 51, 0), (19, 27, 0), (12, 38, 39),
    ),
    _reference(
        "Lviv, Ukraine", 49.8419, 24.0311, "Europe/Kyiv", date(2025, 11, 21),
        (7, 46, 0), (16, 33, 0), (12, 9, 38),
    ),
]


def _coords_to_earth_location(coords: Coordinates) -> EarthLocation:
    """Convert our Coordinates to astropy EarthLocation."""
    return EarthLocation(lat=coords.latitude * u.deg, lon=coords.longitude * u.deg)


def sun_altitude(coords: Coordinates, instant: datetime) -> float:
    """Calculate the Sun's geometric altitude (no refraction) with astropy.

    Args:
        coords: Geographic coordinates
        instant: Timezone-aware time

    Returns:
        Altitude of the Sun's centre in degrees
    """
    utc = instant.astimezone(timezone.utc).replace(tzinfo=None)
    location = _coords_to_earth_location(coords)

    with iers.conf.set_temp("auto_download", False):
        obs_time = Time(utc, scale="utc")
        altaz_frame = AltAz(obstime=obs_time, location=location)
        sun_altaz = get_sun(obs_time).transform_to(altaz_frame)

    return float(sun_altaz.alt.deg)


def check_event_altitudes(engine: SolarPositionEngine, day: date) -> list[AltitudeResidual]:
    """Check every occurring rise/set/twilight event of a day against astropy.

    Solar noon has no altitude threshold and is skipped.
    """
    residuals = []
    for event, instant in engine.events(day).occurring():
        if event.altitude is None:
            continue
        residuals.append(
            AltitudeResidual(
                event=event,
                instant=instant,
                target_deg=float(event.altitude),
                actual_deg=sun_altitude(engine.coordinates, instant),
            )
        )
    return residuals


def compare_with_reference(case: ReferenceCase) -> ReferenceComparison:
    """Calculate sunrise, sunset and solar noon for a reference case."""
    engine = SolarPositionEngine(case.coordinates)
    calculated = {
        event: engine.event(event, case.date, case.timezone)
        for event in (SunEvent.SUNRISE, SunEvent.SUNSET, SunEvent.SOLAR_NOON)
    }
    return ReferenceComparison(case=case, calculated=calculated)
