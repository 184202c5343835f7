"""Environment driven settings for the weather app."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .exceptions import ImproperlyConfigured


def env(name: str, default: str | None = None) -> str:
    """Fetch environment variables while allowing explicit defaults."""

    value = os.environ.get(name, default)
    if value is None:
        raise ImproperlyConfigured(f"Environment variable {name} is required")
    return value


def _optional_float(name: str) -> Optional[float]:
    value = os.environ.get(name)
    if not value:
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise ImproperlyConfigured(f"Environment variable {name} must be a number") from exc


def _default_state_db() -> str:
    return str(Path.home() / ".weatherapp" / "state.sqlite3")


@dataclass
class Settings:
    api_key: str
    weather_url: str = "https://api.openweathermap.org/data/2.5/weather"
    geocoding_url: str = "https://api.openweathermap.org/geo/1.0"
    image_url: str = "https://openweathermap.org/img/wn"
    country: str = "US"
    state_db: str = field(default_factory=_default_state_db)
    request_timeout: Optional[float] = None
    log_level: str = "INFO"


def load_settings() -> Settings:
    return Settings(
        api_key=env("OPENWEATHER_API_KEY"),
        weather_url=env("OPENWEATHER_WEATHER_URL", Settings.weather_url),
        geocoding_url=env("OPENWEATHER_GEOCODING_URL", Settings.geocoding_url),
        image_url=env("OPENWEATHER_IMAGE_URL", Settings.image_url),
        country=env("WEATHERAPP_COUNTRY", Settings.country),
        state_db=env("WEATHERAPP_STATE_DB", _default_state_db()),
        request_timeout=_optional_float("WEATHERAPP_REQUEST_TIMEOUT"),
        log_level=env("WEATHERAPP_LOG_LEVEL", Settings.log_level).upper(),
    )


__all__ = ["Settings", "env", "load_settings"]
