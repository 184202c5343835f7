"""Current weather lookup by city/state, zip code or device location."""
from __future__ import annotations

from .entities import (
    CityRegion,
    Coordinate,
    InputMode,
    PostalCode,
    PresentationState,
    WeatherReading,
)
from .exceptions import (
    LocationNotFound,
    NetworkError,
    PermissionDenied,
    PersistenceFailure,
    ValidationError,
    WeatherAppError,
)

__version__ = "0.1.0"

__all__ = [
    "CityRegion",
    "Coordinate",
    "InputMode",
    "PostalCode",
    "PresentationState",
    "WeatherReading",
    "LocationNotFound",
    "NetworkError",
    "PermissionDenied",
    "PersistenceFailure",
    "ValidationError",
    "WeatherAppError",
]
