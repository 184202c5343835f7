"""Collaborator interfaces used by the orchestrator."""
from __future__ import annotations

from typing import Protocol

from .entities import Coordinate, LocationDescriptor, WeatherReading


class Geocoder(Protocol):
    """Resolves a location descriptor into coordinates."""

    async def geocode(self, descriptor: LocationDescriptor) -> Coordinate:
        """Return the first match; raise ``NetworkError`` on any failure."""
        ...


class WeatherClient(Protocol):
    """A data source capable of returning current conditions."""

    async def fetch_weather(self, coord: Coordinate) -> WeatherReading:
        """Return the reading for ``coord``; raise ``NetworkError`` on any failure."""
        ...


__all__ = ["Geocoder", "WeatherClient"]
