from __future__ import annotations

import math
from typing import List, Optional

from .entities import WeatherReading


def kelvin_to_fahrenheit(kelvin: float) -> str:
    """Format a Kelvin temperature as whole degrees Fahrenheit, e.g. ``"32°F"``."""
    fahrenheit = (kelvin - 273.15) * 9 / 5 + 32
    # half away from zero, not banker's rounding
    rounded = int(math.copysign(math.floor(abs(fahrenheit) + 0.5), fahrenheit))
    return f"{rounded}°F"


def icon_url(image_base: str, icon_code: Optional[str]) -> Optional[str]:
    if not icon_code:
        return None
    return f"{image_base.rstrip('/')}/{icon_code}@2x.png"


def format_reading(reading: WeatherReading) -> List[str]:
    return [
        kelvin_to_fahrenheit(reading.temp_kelvin),
        f"{reading.condition_title} - {reading.description}",
        f"Feels Like    {kelvin_to_fahrenheit(reading.feels_like_kelvin)}",
        f"Today's Low   {kelvin_to_fahrenheit(reading.temp_min_kelvin)}",
        f"Today's High  {kelvin_to_fahrenheit(reading.temp_max_kelvin)}",
        f"Humidity      {reading.humidity_percent}%",
    ]


__all__ = ["kelvin_to_fahrenheit", "icon_url", "format_reading"]
