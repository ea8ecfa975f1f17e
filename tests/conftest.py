"""Pytest fixtures for solar event tests.

This module provides test fixtures that ensure:
1. Settings are never read from a developer's .env or shell environment
2. Engines for the well-known reference locations are shared across tests
"""

import os
from datetime import date, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

# Clear configuration BEFORE importing application modules
for _key in list(os.environ):
    if _key.startswith("SUN_TIMES_"):
        del os.environ[_key]

from sun_times.astronomy.calculator import SolarPositionEngine
from sun_times.models.location import Coordinates


# =============================================================================
# Test Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset settings cache before each test to ensure clean state."""
    from sun_times.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Location Fixtures
# =============================================================================


@pytest.fixture
def paris_coordinates() -> Coordinates:
    """Paris, France."""
    return Coordinates(latitude=48.87, longitude=2.67)


@pytest.fixture
def paris(paris_coordinates: Coordinates) -> SolarPositionEngine:
    """Engine for Paris."""
    return SolarPositionEngine(paris_coordinates)


@pytest.fixture
def london() -> SolarPositionEngine:
    """Engine for London, UK."""
    return SolarPositionEngine(51.5, -0.13)


@pytest.fixture
def north_pole_region() -> SolarPositionEngine:
    """Engine at 85°N, where the Sun stays down around the December solstice."""
    return SolarPositionEngine(85.0, 0.0)


@pytest.fixture
def svalbard() -> SolarPositionEngine:
    """Engine for Longyearbyen, Svalbard (78°N)."""
    return SolarPositionEngine(78.22, 15.65)


# =============================================================================
# Time Fixtures
# =============================================================================


@pytest.fixture
def paris_date() -> date:
    """Reference date for Paris checks."""
    return date(2025, 11, 2)


@pytest.fixture
def utc_plus_one() -> timezone:
    """Fixed UTC+1 offset (Paris in winter)."""
    return timezone(timedelta(hours=1))


@pytest.fixture
def paris_tz() -> ZoneInfo:
    """Europe/Paris zone."""
    return ZoneInfo("Europe/Paris")
