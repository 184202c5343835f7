from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Union

from .exceptions import ValidationError


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    def is_unset(self) -> bool:
        """True for the (0, 0) pair used to mean "nothing saved"."""
        return self.latitude == 0.0 and self.longitude == 0.0


@dataclass(frozen=True)
class CityRegion:
    city: str
    region: str

    def __post_init__(self) -> None:
        if self.city == "":
            raise ValidationError("Please enter a city")
        if self.region == "":
            raise ValidationError("Please select a state")


@dataclass(frozen=True)
class PostalCode:
    postal_code: str

    def __post_init__(self) -> None:
        if self.postal_code == "":
            raise ValidationError("Please enter a zip code")


LocationDescriptor = Union[CityRegion, PostalCode]


@dataclass(frozen=True)
class WeatherReading:
    """Current conditions for a coordinate.

    Temperatures are kept in Kelvin as delivered upstream; conversion for
    display happens in :mod:`weatherapp.formatting`.
    """

    condition_title: str
    description: str
    icon_code: str
    temp_kelvin: float
    feels_like_kelvin: float
    temp_min_kelvin: float
    temp_max_kelvin: float
    humidity_percent: int


class InputMode(str, enum.Enum):
    CITY_STATE = "City & State"
    POSTAL_CODE = "Zip Code"


@dataclass
class PresentationState:
    input_mode: InputMode = InputMode.CITY_STATE
    city_input: str = ""
    region_input: str = ""
    postal_input: str = ""
    current_reading: Optional[WeatherReading] = None
    error_message: str = ""
    location_permission_denied: bool = False


# US states and territories offered by the region picker; "" means no selection.
REGIONS = (
    "", "AK", "AL", "AR", "AS", "AZ", "CA", "CO", "CT", "DC", "DE", "FL", "GA",
    "GU", "HI", "IA", "ID", "IL", "IN", "KS", "KY", "LA", "MA", "MD", "ME", "MI",
    "MN", "MO", "MS", "MT", "NC", "ND", "NE", "NH", "NJ", "NM", "NV", "NY", "OH",
    "OK", "OR", "PA", "PR", "RI", "SC", "SD", "TN", "TX", "UT", "VA", "VI", "VT",
    "WA", "WI", "WV", "WY",
)


__all__ = [
    "Coordinate",
    "CityRegion",
    "PostalCode",
    "LocationDescriptor",
    "WeatherReading",
    "InputMode",
    "PresentationState",
    "REGIONS",
]
