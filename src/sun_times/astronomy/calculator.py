"""Solar event calculations using the NOAA simplified solar model.

This module provides calculations for:
- Julian Day of a civil date
- Sun position (mean anomaly, ecliptic longitude, declination, transit)
- Sunrise/sunset and twilight times (civil, nautical, astronomical)
- Solar noon and daylight length
- Times when the Sun crosses any altitude threshold

The equations follow Jean Meeus, "Astronomical Algorithms" (2nd ed., 1998) as
simplified by the NOAA Solar Calculator (https://gml.noaa.gov/grad/solcalc/).
Results are typically within a minute of the NOAA reference data.

All instants are returned as timezone-aware datetimes: UTC by default, or
projected into the zone passed as `tz` (a tzinfo or an IANA name).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sun_times.exceptions import InvalidComputationError, NoEventError
from sun_times.models.events import (
    DoesNotOccur,
    EventOutcome,
    Occurs,
    SunEvent,
    SunEvents,
)
from sun_times.models.location import Coordinates

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Astronomical constants (Meeus / NOAA)
# ---------------------------------------------------------------------------

J2000 = 2451545.0  # Julian Day of J2000.0 (2000-01-01 12:00 TT)
MEAN_ANOMALY_AT_EPOCH = 357.5291  # Mean anomaly at J2000.0 (deg)
DAILY_MOTION = 0.98564736  # Mean daily motion (deg/day)
PERIHELION_LONGITUDE = 102.9373  # Longitude of perihelion (deg)
OBLIQUITY = 23.43929111  # Mean obliquity of the ecliptic (deg)
TRANSIT_ECCENTRICITY_CORRECTION = 0.00534
TRANSIT_OBLIQUITY_CORRECTION = 0.00692

# Equation of center coefficients for sin(M), sin(2M), sin(3M)
EQUATION_OF_CENTER_COEFFS = (1.9148, 0.0200, 0.0003)

# ---------------------------------------------------------------------------
# Julian Day conversion constants (Gregorian calendar)
# ---------------------------------------------------------------------------

JULIAN_YEAR_DAYS = 365.25
JULIAN_MONTH_FACTOR = 30.6001
JULIAN_EPOCH_YEAR_OFFSET = 4716
JULIAN_BASE_OFFSET = 1524.5  # Aligns JD 0 with 4713 BCE Jan 1 12:00 UT
JULIAN_MIDNIGHT_FIX = 0.5

# ---------------------------------------------------------------------------
# Epoch conversion constants
# ---------------------------------------------------------------------------

UNIX_EPOCH_JD = 2440587.5  # 1970-01-01 00:00 UTC
SECONDS_PER_DAY = 86400.0
UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class SolarPosition:
    """Sun position for a Julian Day, as seen from a given longitude."""

    mean_anomaly: float  # Degrees, [0, 360)
    ecliptic_longitude: float  # Degrees, [0, 360)
    declination: float  # Degrees, [-90, 90]
    transit_jd: float  # Julian Day of local solar noon


def normalize_angle(angle: float) -> float:
    """Normalize an angle in degrees into [0, 360)."""
    return angle % 360.0


def _calendar_date(day: date) -> date:
    """Strip the time of day (and zone) from a date or datetime."""
    if isinstance(day, datetime):
        return day.date()
    if isinstance(day, date):
        return day
    raise TypeError(f"Expected a date or datetime, got {type(day).__name__}")


def resolve_timezone(tz: tzinfo | str | None) -> tzinfo | None:
    """Turn an IANA zone name into a tzinfo; pass tzinfo and None through."""
    if tz is None or isinstance(tz, tzinfo):
        return tz
    try:
        return ZoneInfo(tz)
    except ZoneInfoNotFoundError as e:
        raise ValueError(f"Unknown timezone: '{tz}'") from e


def julian_day(day: date) -> float:
    """Convert a civil date to a Julian Day.

    The USNO/Meeus formula gives the Julian Day of the date; the result is
    advanced by one day and then moved back by half a day, giving the Julian
    Day of 12:00 UT on the requested date. Every date, including date.max,
    yields a finite value. The solar model below is calibrated
    against this value.

    Args:
        day: Proleptic Gregorian date; the time of a datetime is ignored

    Returns:
        Julian Day as a float
    """
    day = _calendar_date(day)
    year, month = day.year, day.month
    if month <= 2:
        year -= 1
        month += 12

    century = year // 100
    gregorian_correction = 2 - century + century // 4

    jd = (
        math.floor(JULIAN_YEAR_DAYS * (year + JULIAN_EPOCH_YEAR_OFFSET))
        + math.floor(JULIAN_MONTH_FACTOR * (month + 1))
        + day.day
        + gregorian_correction
        - JULIAN_BASE_OFFSET
    )
    return jd + 1.0 - JULIAN_MIDNIGHT_FIX


def solar_position(jd: float, longitude: float) -> SolarPosition:
    """Calculate the Sun's position for a Julian Day.

    Args:
        jd: Julian Day from `julian_day`
        longitude: Observer longitude in degrees (east positive)

    Returns:
        SolarPosition with anomaly, ecliptic longitude, declination and the
        Julian Day of solar transit at that longitude
    """
    mean_anomaly = normalize_angle(MEAN_ANOMALY_AT_EPOCH + DAILY_MOTION * (jd - J2000))
    m = math.radians(mean_anomaly)

    c1, c2, c3 = EQUATION_OF_CENTER_COEFFS
    equation_of_center = c1 * math.sin(m) + c2 * math.sin(2 * m) + c3 * math.sin(3 * m)

    ecliptic_longitude = normalize_angle(
        mean_anomaly + equation_of_center + PERIHELION_LONGITUDE + 180.0
    )
    lam = math.radians(ecliptic_longitude)

    declination = math.degrees(
        math.asin(math.sin(lam) * math.sin(math.radians(OBLIQUITY)))
    )

    # Days since J2000.0 to the approximate local noon
    n = jd - J2000 - longitude / 360.0
    transit_jd = (
        J2000
        + n
        + TRANSIT_ECCENTRICITY_CORRECTION * math.sin(m)
        - TRANSIT_OBLIQUITY_CORRECTION * math.sin(2 * lam)
    )

    return SolarPosition(
        mean_anomaly=mean_anomaly,
        ecliptic_longitude=ecliptic_longitude,
        declination=declination,
        transit_jd=transit_jd,
    )


def hour_angle(latitude: float, declination: float, altitude: float) -> float | None:
    """Solve for the hour angle at which the Sun reaches `altitude`.

    Returns:
        Hour angle in degrees within [0, 180], or None when the Sun stays
        entirely above or below the altitude all day (polar day/night)
    """
    phi = math.radians(latitude)
    delta = math.radians(declination)

    cos_h0 = (math.sin(math.radians(altitude)) - math.sin(phi) * math.sin(delta)) / (
        math.cos(phi) * math.cos(delta)
    )
    if abs(cos_h0) > 1:
        return None

    return math.degrees(math.acos(cos_h0))


def event_julian_day(transit_jd: float, hour_angle_deg: float, rising: bool) -> float:
    """Julian Day of a rising (before transit) or setting (after) event."""
    offset = hour_angle_deg / 360.0
    return transit_jd - offset if rising else transit_jd + offset


def to_instant(jd: float, tz: tzinfo | str | None = None) -> datetime:
    """Convert a Julian Day to a timezone-aware datetime.

    Args:
        jd: Julian Day
        tz: Zone to express the result in (UTC if None)

    Raises:
        InvalidComputationError: If jd is NaN, infinite or out of range
    """
    if math.isnan(jd) or math.isinf(jd):
        logger.error(f"Refusing to convert non-finite Julian Day: {jd}")
        raise InvalidComputationError(f"Invalid Julian Day: {jd}")

    seconds = (jd - UNIX_EPOCH_JD) * SECONDS_PER_DAY
    try:
        instant = UNIX_EPOCH + timedelta(seconds=seconds)
    except OverflowError as e:
        raise InvalidComputationError(f"Julian Day out of range: {jd}") from e

    zone = resolve_timezone(tz)
    return instant.astimezone(zone) if zone is not None else instant


class SolarPositionEngine:
    """Solar event calculator for a fixed location.

    The engine holds nothing but its coordinates, so a single instance can be
    shared freely between threads.

    Example:
        ```python
        sun = SolarPositionEngine(48.87, 2.67)  # Paris

        sun.sunrise(date(2025, 11, 2), "Europe/Paris")
        # 2025-11-02 07:38+01:00

        sun.civil_dusk_or_none(date(2025, 6, 21))  # None in polar day

        sun.events(date(2025, 11, 2)).model_dump_json()
        ```
    """

    def __init__(
        self,
        latitude: float | tuple[float, float] | Coordinates,
        longitude: float | None = None,
    ):
        """Initialize the engine for a location.

        Args:
            latitude: Degrees north, or a (latitude, longitude) pair, or
                Coordinates
            longitude: Degrees east; required when latitude is a scalar

        Raises:
            ValueError: If coordinates are out of range
            TypeError: If the arguments do not form a coordinate
        """
        if isinstance(latitude, Coordinates):
            if longitude is not None:
                raise TypeError("longitude must not be given together with Coordinates")
            coordinates = latitude
        elif isinstance(latitude, (tuple, list)):
            if longitude is not None:
                raise TypeError("longitude must not be given together with a coordinate pair")
            coordinates = Coordinates.from_tuple(tuple(latitude))
        else:
            if longitude is None:
                raise TypeError("longitude is required when latitude is a number")
            coordinates = Coordinates(latitude=latitude, longitude=longitude)

        self._coordinates = coordinates

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.latitude}, {self.longitude})"

    @property
    def coordinates(self) -> Coordinates:
        return self._coordinates

    @property
    def latitude(self) -> float:
        return self._coordinates.latitude

    @property
    def longitude(self) -> float:
        return self._coordinates.longitude

    def position(self, day: date) -> SolarPosition:
        """Sun position for the given date at this longitude."""
        return solar_position(julian_day(day), self.longitude)

    def solve_event(
        self,
        day: date,
        altitude_deg: float,
        rising: bool,
        tz: tzinfo | str | None = None,
    ) -> EventOutcome:
        """Find when the Sun crosses an altitude on the given date.

        This is the single computation behind sunrise, sunset and every
        twilight boundary; any other threshold (e.g. +6° for golden hour)
        works the same way.

        Args:
            day: Date to calculate for (time portion is ignored)
            altitude_deg: Altitude of the Sun's centre in degrees
            rising: True for the morning crossing, False for the evening one
            tz: Zone for the resulting instant

        Returns:
            Occurs with the instant, or DoesNotOccur for polar conditions
        """
        tz = resolve_timezone(tz)
        position = self.position(day)
        h0 = hour_angle(self.latitude, position.declination, altitude_deg)
        if h0 is None:
            logger.debug(
                f"Sun does not cross {float(altitude_deg)}° "
                f"({'rising' if rising else 'setting'}) at {self._coordinates} "
                f"on {_calendar_date(day).isoformat()}"
            )
            return DoesNotOccur(altitude_deg=float(altitude_deg), rising=rising)

        return Occurs(to_instant(event_julian_day(position.transit_jd, h0, rising), tz))

    def event(
        self, event: SunEvent | str, day: date, tz: tzinfo | str | None = None
    ) -> datetime:
        """Get the instant of a named event.

        Raises:
            NoEventError: If the event does not occur on this date
        """
        event = SunEvent(event)
        if event is SunEvent.SOLAR_NOON:
            return self.solar_noon(day, tz)

        outcome = self.solve_event(day, event.altitude, event.rising, tz)
        if isinstance(outcome, DoesNotOccur):
            raise NoEventError(
                event.label,
                _calendar_date(day),
                altitude_deg=outcome.altitude_deg,
                rising=outcome.rising,
            )
        return outcome.instant

    def event_or_none(
        self, event: SunEvent | str, day: date, tz: tzinfo | str | None = None
    ) -> datetime | None:
        """Get the instant of a named event, or None if it does not occur."""
        event = SunEvent(event)
        if event is SunEvent.SOLAR_NOON:
            return self.solar_noon(day, tz)

        outcome = self.solve_event(day, event.altitude, event.rising, tz)
        return outcome.instant if isinstance(outcome, Occurs) else None

    def solar_noon(self, day: date, tz: tzinfo | str | None = None) -> datetime:
        """Get the time the Sun crosses the local meridian.

        Solar noon always occurs, even in polar night.
        """
        return to_instant(self.position(day).transit_jd, tz)

    # Sunrise / sunset (-0.8333°)

    def sunrise(self, day: date, tz: tzinfo | str | None = None) -> datetime:
        """Get sunrise.

        Raises:
            NoEventError: If there is no sunrise (polar night or polar day)
        """
        return self.event(SunEvent.SUNRISE, day, tz)

    def sunrise_or_none(self, day: date, tz: tzinfo | str | None = None) -> datetime | None:
        return self.event_or_none(SunEvent.SUNRISE, day, tz)

    def sunset(self, day: date, tz: tzinfo | str | None = None) -> datetime:
        """Get sunset.

        Raises:
            NoEventError: If there is no sunset (polar night or polar day)
        """
        return self.event(SunEvent.SUNSET, day, tz)

    def sunset_or_none(self, day: date, tz: tzinfo | str | None = None) -> datetime | None:
        return self.event_or_none(SunEvent.SUNSET, day, tz)

    # Civil twilight (-6°)

    def civil_dawn(self, day: date, tz: tzinfo | str | None = None) -> datetime:
        return self.event(SunEvent.CIVIL_DAWN, day, tz)

    def civil_dawn_or_none(self, day: date, tz: tzinfo | str | None = None) -> datetime | None:
        return self.event_or_none(SunEvent.CIVIL_DAWN, day, tz)

    def civil_dusk(self, day: date, tz: tzinfo | str | None = None) -> datetime:
        return self.event(SunEvent.CIVIL_DUSK, day, tz)

    def civil_dusk_or_none(self, day: date, tz: tzinfo | str | None = None) -> datetime | None:
        return self.event_or_none(SunEvent.CIVIL_DUSK, day, tz)

    # Nautical twilight (-12°)

    def nautical_dawn(self, day: date, tz: tzinfo | str | None = None) -> datetime:
        return self.event(SunEvent.NAUTICAL_DAWN, day, tz)

    def nautical_dawn_or_none(
        self, day: date, tz: tzinfo | str | None = None
    ) -> datetime | None:
        return self.event_or_none(SunEvent.NAUTICAL_DAWN, day, tz)

    def nautical_dusk(self, day: date, tz: tzinfo | str | None = None) -> datetime:
        return self.event(SunEvent.NAUTICAL_DUSK, day, tz)

    def nautical_dusk_or_none(
        self, day: date, tz: tzinfo | str | None = None
    ) -> datetime | None:
        return self.event_or_none(SunEvent.NAUTICAL_DUSK, day, tz)

    # Astronomical twilight (-18°)

    def astronomical_dawn(self, day: date, tz: tzinfo | str | None = None) -> datetime:
        return self.event(SunEvent.ASTRONOMICAL_DAWN, day, tz)

    def astronomical_dawn_or_none(
        self, day: date, tz: tzinfo | str | None = None
    ) -> datetime | None:
        return self.event_or_none(SunEvent.ASTRONOMICAL_DAWN, day, tz)

    def astronomical_dusk(self, day: date, tz: tzinfo | str | None = None) -> datetime:
        return self.event(SunEvent.ASTRONOMICAL_DUSK, day, tz)

    def astronomical_dusk_or_none(
        self, day: date, tz: tzinfo | str | None = None
    ) -> datetime | None:
        return self.event_or_none(SunEvent.ASTRONOMICAL_DUSK, day, tz)

    # Derived values

    def daylight_length(self, day: date) -> timedelta:
        """Get the time between sunrise and sunset.

        Returns:
            Daylight duration, or zero if there is no sunrise or no sunset
            (polar night or polar day)
        """
        sunrise = self.sunrise_or_none(day)
        sunset = self.sunset_or_none(day)
        if sunrise is None or sunset is None:
            return timedelta(0)
        return sunset - sunrise

    def daylight_remaining(
        self, now: datetime, tz: tzinfo | str | None = None
    ) -> timedelta | None:
        """Get the daylight left between `now` and today's sunset.

        "Today" is the calendar date of `now` in `tz` (or in now's own zone).

        Returns:
            Time until sunset, or None if `now` is outside sunrise..sunset
        """
        if now.tzinfo is None:
            raise ValueError("now must be timezone-aware")

        zone = resolve_timezone(tz)
        local_now = now.astimezone(zone) if zone is not None else now

        sunrise = self.sunrise_or_none(local_now)
        sunset = self.sunset_or_none(local_now)
        if sunrise is None or sunset is None or not sunrise <= now <= sunset:
            return None
        return sunset - now

    def events(self, day: date, tz: tzinfo | str | None = None) -> SunEvents:
        """Get all nine solar events for a date in chronological order."""
        return SunEvents(
            **{event.value: self.event_or_none(event, day, tz) for event in SunEvent}
        )
