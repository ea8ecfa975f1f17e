"""Application configuration.

Configuration is loaded from environment variables using pydantic-settings.
Every variable is prefixed with `SUN_TIMES_`. The calculation engine itself
takes explicit arguments; these settings only provide defaults for the CLI.

## Optional Environment Variables

- SUN_TIMES_LOG_LEVEL: Logging level (default: WARNING)
- SUN_TIMES_DEFAULT_TIMEZONE: IANA zone for printed times (default: UTC)
- SUN_TIMES_BENCHMARK_ITERATIONS: Iterations per benchmarked accessor
- SUN_TIMES_BENCHMARK_SEED: Random seed for reproducible benchmarks

## Example .env file

```
SUN_TIMES_LOG_LEVEL=DEBUG
SUN_TIMES_DEFAULT_TIMEZONE=Europe/Paris
SUN_TIMES_BENCHMARK_ITERATIONS=1000000
```
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SUN_TIMES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "sun-times"
    app_version: str = "0.1.0"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    # Output
    default_timezone: str = Field(
        default="UTC",
        description="IANA timezone used by the CLI when --tz is not given",
    )

    # Benchmark
    benchmark_iterations: int = Field(default=100_000, ge=1, le=100_000_000)
    benchmark_seed: int | None = None

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("default_timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Ensure the default timezone is a known IANA zone."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: '{v}'") from e
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached. To reload, clear the cache:
    ```python
    get_settings.cache_clear()
    ```
    """
    return Settings()


def get_settings_uncached() -> Settings:
    """Get fresh settings without caching.

    Useful for testing when environment variables change.
    """
    return Settings()
