"""OpenWeather geocoding client."""
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import pydantic

from .base import HttpProvider, NetworkError
from .schemas import GeocodingResult
from ..entities import CityRegion, Coordinate, LocationDescriptor, PostalCode
from ..exceptions import LocationNotFound


class OpenWeatherGeocoder(HttpProvider):
    base_url = "https://api.openweathermap.org/geo/1.0"

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        country: str = "US",
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = (base_url or self.base_url).rstrip("/")
        self.country = country

    async def geocode(self, descriptor: LocationDescriptor) -> Coordinate:
        url, params = self._build_request(descriptor)
        response = await self._arequest("GET", url, params=params)
        data = self._json(response)
        # the direct endpoint answers with a list, the zip endpoint with an object
        if isinstance(data, list):
            if not data:
                self._log.info("No geocoding match for %s", descriptor)
                raise LocationNotFound()
            data = data[0]
        try:
            result = GeocodingResult.model_validate(data)
        except pydantic.ValidationError as exc:
            self._log.error("Unexpected geocoding payload: %s", exc)
            raise NetworkError("invalid payload") from exc
        return result.to_coordinate()

    def _build_request(self, descriptor: LocationDescriptor) -> Tuple[str, Dict[str, Any]]:
        if isinstance(descriptor, CityRegion):
            query = f"{descriptor.city},{descriptor.region},{self.country}"
            return f"{self.base_url}/direct", {"q": query, "limit": 1, "appid": self.api_key}
        if isinstance(descriptor, PostalCode):
            query = f"{descriptor.postal_code},{self.country}"
            return f"{self.base_url}/zip", {"zip": query, "appid": self.api_key}
        raise TypeError(f"Unsupported descriptor: {descriptor!r}")


__all__ = ["OpenWeatherGeocoder"]
