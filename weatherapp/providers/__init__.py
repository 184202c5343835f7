from .base import HttpProvider, NetworkError, RequestConfig
from .geocoding import OpenWeatherGeocoder
from .openweather import OpenWeatherClient

__all__ = ["HttpProvider", "NetworkError", "RequestConfig", "OpenWeatherGeocoder", "OpenWeatherClient"]
