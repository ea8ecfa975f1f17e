"""Tests for application configuration."""

import pytest
from pydantic import ValidationError

from sun_times.config import get_settings, get_settings_uncached


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self):
        """Test default values."""
        settings = get_settings_uncached()

        assert settings.app_name == "sun-times"
        assert settings.log_level == "WARNING"
        assert settings.default_timezone == "UTC"
        assert settings.benchmark_iterations == 100_000
        assert settings.benchmark_seed is None

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch):
        """Test that SUN_TIMES_ variables are read."""
        monkeypatch.setenv("SUN_TIMES_DEFAULT_TIMEZONE", "Europe/Paris")
        monkeypatch.setenv("SUN_TIMES_BENCHMARK_ITERATIONS", "500")
        monkeypatch.setenv("SUN_TIMES_BENCHMARK_SEED", "42")

        settings = get_settings_uncached()

        assert settings.default_timezone == "Europe/Paris"
        assert settings.benchmark_iterations == 500
        assert settings.benchmark_seed == 42

    def test_log_level_case_insensitive(self, monkeypatch: pytest.MonkeyPatch):
        """Test that lower-case log levels are accepted."""
        monkeypatch.setenv("SUN_TIMES_LOG_LEVEL", "debug")
        assert get_settings_uncached().log_level == "DEBUG"

    def test_unknown_timezone_rejected(self, monkeypatch: pytest.MonkeyPatch):
        """Test that an unknown default timezone fails validation."""
        monkeypatch.setenv("SUN_TIMES_DEFAULT_TIMEZONE", "Nowhere/Special")
        with pytest.raises(ValidationError, match="Unknown timezone"):
            get_settings_uncached()

    def test_iterations_bounds(self, monkeypatch: pytest.MonkeyPatch):
        """Test that benchmark iterations must be positive."""
        monkeypatch.setenv("SUN_TIMES_BENCHMARK_ITERATIONS", "0")
        with pytest.raises(ValidationError):
            get_settings_uncached()

    def test_cached(self):
        """Test that get_settings returns the same object until cleared."""
        assert get_settings() is get_settings()
