"""Tests comparing the solar model with reference data and astropy."""

from datetime import date, timedelta

import pytest

from sun_times.astronomy.accuracy import (
    REFERENCE_CASES,
    ReferenceCase,
    check_event_altitudes,
    compare_with_reference,
    sun_altitude,
)
from sun_times.astronomy.calculator import SolarPositionEngine
from sun_times.models.events import SunEvent


class TestReferenceCases:
    """Tests against the NOAA Solar Calculator."""

    @pytest.mark.parametrize("case", REFERENCE_CASES, ids=lambda case: case.name)
    def test_within_two_minutes(self, case: ReferenceCase):
        """Test sunrise, sunset and solar noon for each reference city."""
        comparison = compare_with_reference(case)

        assert set(comparison.calculated) == {
            SunEvent.SUNRISE,
            SunEvent.SUNSET,
            SunEvent.SOLAR_NOON,
        }
        assert comparison.max_difference < timedelta(minutes=2)

    def test_results_in_local_zone(self):
        """Test that calculated times use the case's timezone."""
        case = next(c for c in REFERENCE_CASES if c.name == "Sydney, Australia")
        comparison = compare_with_reference(case)

        sunrise = comparison.calculated[SunEvent.SUNRISE]
        assert sunrise.utcoffset() == timedelta(hours=11)
        assert sunrise.date() == case.date

    def test_case_coordinates(self):
        """Test that reference cases expose validated coordinates."""
        case = REFERENCE_CASES[0]
        assert case.coordinates.to_tuple() == (case.latitude, case.longitude)


class TestAstropyCrossCheck:
    """Tests comparing event times with astropy's sun position."""

    def test_altitude_at_sunrise(self):
        """Test that the Sun sits near -0.8333° at computed sunrise."""
        london = SolarPositionEngine(51.5, -0.13)
        sunrise = london.sunrise(date(2024, 3, 20))

        altitude = sun_altitude(london.coordinates, sunrise)
        assert altitude == pytest.approx(-0.8333, abs=0.5)

    def test_altitude_at_noon_is_highest(self):
        """Test that the Sun is higher at solar noon than an hour either side."""
        london = SolarPositionEngine(51.5, -0.13)
        noon = london.solar_noon(date(2024, 3, 20))

        at_noon = sun_altitude(london.coordinates, noon)
        assert at_noon > sun_altitude(london.coordinates, noon - timedelta(hours=1))
        assert at_noon > sun_altitude(london.coordinates, noon + timedelta(hours=1))

    def test_event_residuals(self):
        """Test every occurring Paris event on the June solstice."""
        paris = SolarPositionEngine(48.87, 2.67)
        residuals = check_event_altitudes(paris, date(2024, 6, 21))

        # No astronomical night in Paris at midsummer
        events = {residual.event for residual in residuals}
        assert SunEvent.ASTRONOMICAL_DAWN not in events
        assert SunEvent.SOLAR_NOON not in events
        assert SunEvent.SUNRISE in events

        for residual in residuals:
            assert abs(residual.residual_deg) < 0.5, residual.event
