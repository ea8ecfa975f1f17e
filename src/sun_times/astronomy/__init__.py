"""Solar event calculations: sunrise, sunset, solar noon and twilight."""

from sun_times.astronomy.calculator import (
    SolarPosition,
    SolarPositionEngine,
    hour_angle,
    julian_day,
    solar_position,
    to_instant,
)

__all__ = [
    "SolarPosition",
    "SolarPositionEngine",
    "hour_angle",
    "julian_day",
    "solar_position",
    "to_instant",
]
