"""Pydantic schemas for the OpenWeather payloads."""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from ..entities import Coordinate, WeatherReading

__all__ = ["ConditionPayload", "MainPayload", "WeatherPayload", "GeocodingResult"]


class ConditionPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    # upstream calls the short condition name "main"
    title: str = Field(alias="main")
    description: str
    icon: str


class MainPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    temp: float
    feels_like: float
    temp_min: float
    temp_max: float
    humidity: int


class WeatherPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    weather: List[ConditionPayload] = Field(min_length=1)
    main: MainPayload

    def to_reading(self) -> WeatherReading:
        condition = self.weather[0]
        return WeatherReading(
            condition_title=condition.title,
            description=condition.description,
            icon_code=condition.icon,
            temp_kelvin=self.main.temp,
            feels_like_kelvin=self.main.feels_like,
            temp_min_kelvin=self.main.temp_min,
            temp_max_kelvin=self.main.temp_max,
            humidity_percent=self.main.humidity,
        )


class GeocodingResult(BaseModel):
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    lat: float
    lon: float

    def to_coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.lat, longitude=self.lon)
