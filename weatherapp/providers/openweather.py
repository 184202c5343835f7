"""OpenWeather current conditions client."""
from __future__ import annotations

from typing import Optional

import pydantic

from .base import HttpProvider, NetworkError
from .schemas import WeatherPayload
from ..entities import Coordinate, WeatherReading


class OpenWeatherClient(HttpProvider):
    base_url = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(self, api_key: str, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = base_url or self.base_url

    async def fetch_weather(self, coord: Coordinate) -> WeatherReading:
        """Return current conditions for ``coord``; raises :class:`NetworkError`."""
        params = {"lat": coord.latitude, "lon": coord.longitude, "appid": self.api_key}
        response = await self._arequest("GET", self.base_url, params=params)
        data = self._json(response)
        try:
            payload = WeatherPayload.model_validate(data)
        except pydantic.ValidationError as exc:
            self._log.error("Unexpected weather payload: %s", exc)
            raise NetworkError("invalid payload") from exc
        reading = payload.to_reading()
        self._log.debug("Weather for %s: %s", coord, reading.condition_title)
        return reading


__all__ = ["OpenWeatherClient"]
