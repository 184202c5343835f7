"""Error taxonomy for the weather app core."""
from __future__ import annotations


class WeatherAppError(Exception):
    """Base error for the package."""


class ImproperlyConfigured(WeatherAppError):
    """Raised when required configuration is missing."""


class ValidationError(WeatherAppError, ValueError):
    """A required input field is missing.

    The message is the user-facing sentence shown next to the form.
    """


class NetworkError(WeatherAppError, RuntimeError):
    """Malformed URL, transport failure, non-2xx response or undecodable body."""


class LocationNotFound(NetworkError):
    """The geocoding service returned no match for the descriptor."""

    def __init__(self, message: str = "Error fetching location") -> None:
        super().__init__(message)


class PermissionDenied(WeatherAppError):
    """Device location access was denied or restricted."""


class PersistenceFailure(WeatherAppError):
    """Reading or writing the last known location failed."""


__all__ = [
    "WeatherAppError",
    "ImproperlyConfigured",
    "ValidationError",
    "NetworkError",
    "LocationNotFound",
    "PermissionDenied",
    "PersistenceFailure",
]
