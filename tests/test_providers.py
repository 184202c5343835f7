from __future__ import annotations

import asyncio

import pytest

from weatherapp.entities import CityRegion, Coordinate, PostalCode
from weatherapp.exceptions import LocationNotFound, NetworkError
from weatherapp.providers import OpenWeatherClient, OpenWeatherGeocoder


WEATHER_URL = "https://owm.test/data/2.5/weather"
GEO_URL = "https://owm.test/geo/1.0"


def weather_payload(**overrides):
    payload = {
        "coord": {"lon": -75.0, "lat": 40.0},
        "weather": [
            {"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"},
            {"id": 701, "main": "Mist", "description": "mist", "icon": "50d"},
        ],
        "main": {
            "temp": 293.15,
            "feels_like": 292.5,
            "temp_min": 290.0,
            "temp_max": 295.0,
            "pressure": 1012,
            "humidity": 64,
        },
        "name": "Somewhere",
    }
    payload.update(overrides)
    return payload


def test_weather_client_normalization(requests_mock):
    client = OpenWeatherClient(api_key="test", base_url=WEATHER_URL)
    requests_mock.get(WEATHER_URL, json=weather_payload())

    reading = asyncio.run(client.fetch_weather(Coordinate(40.0, -75.0)))

    assert reading.condition_title == "Clear"
    assert reading.description == "clear sky"
    assert reading.icon_code == "01d"
    assert reading.temp_kelvin == 293.15
    assert reading.feels_like_kelvin == 292.5
    assert reading.temp_min_kelvin == 290.0
    assert reading.temp_max_kelvin == 295.0
    assert reading.humidity_percent == 64
    assert requests_mock.call_count == 1
    query = requests_mock.last_request.qs
    assert query["lat"] == ["40.0"]
    assert query["lon"] == ["-75.0"]
    assert query["appid"] == ["test"]


def test_weather_client_requires_a_condition(requests_mock):
    client = OpenWeatherClient(api_key="test", base_url=WEATHER_URL)
    requests_mock.get(WEATHER_URL, json=weather_payload(weather=[]))

    with pytest.raises(NetworkError):
        asyncio.run(client.fetch_weather(Coordinate(1.0, 1.0)))


@pytest.mark.parametrize("status", [401, 404, 500])
def test_weather_client_http_errors(requests_mock, status):
    client = OpenWeatherClient(api_key="test", base_url=WEATHER_URL)
    requests_mock.get(WEATHER_URL, status_code=status, text="nope")

    with pytest.raises(NetworkError) as excinfo:
        asyncio.run(client.fetch_weather(Coordinate(1.0, 1.0)))

    assert str(excinfo.value) == f"HTTP {status}"


def test_weather_client_invalid_json(requests_mock):
    client = OpenWeatherClient(api_key="test", base_url=WEATHER_URL)
    requests_mock.get(WEATHER_URL, text="<html>oops</html>")

    with pytest.raises(NetworkError, match="invalid json"):
        asyncio.run(client.fetch_weather(Coordinate(1.0, 1.0)))


def test_weather_client_malformed_url():
    client = OpenWeatherClient(api_key="test", base_url="not a url")

    with pytest.raises(NetworkError, match="invalid url"):
        asyncio.run(client.fetch_weather(Coordinate(1.0, 1.0)))


def test_geocoder_city_region_uses_direct_query(requests_mock):
    geocoder = OpenWeatherGeocoder(api_key="test", base_url=GEO_URL)
    requests_mock.get(
        f"{GEO_URL}/direct",
        json=[
            {"name": "Philadelphia", "lat": 39.95, "lon": -75.16, "country": "US", "state": "Pennsylvania"},
            {"name": "Philadelphia", "lat": 32.77, "lon": -89.12, "country": "US", "state": "Mississippi"},
        ],
    )

    coord = asyncio.run(geocoder.geocode(CityRegion(city="Philadelphia", region="PA")))

    assert coord == Coordinate(latitude=39.95, longitude=-75.16)
    assert requests_mock.call_count == 1
    request = requests_mock.last_request
    assert request.path == "/geo/1.0/direct"
    assert [value.lower() for value in request.qs["q"]] == ["philadelphia,pa,us"]
    assert request.qs["limit"] == ["1"]


def test_geocoder_postal_code_uses_zip_query(requests_mock):
    geocoder = OpenWeatherGeocoder(api_key="test", base_url=GEO_URL)
    requests_mock.get(
        f"{GEO_URL}/zip",
        json={"zip": "19104", "name": "Philadelphia", "lat": 39.96, "lon": -75.2, "country": "US"},
    )

    coord = asyncio.run(geocoder.geocode(PostalCode(postal_code="19104")))

    assert coord == Coordinate(latitude=39.96, longitude=-75.2)
    request = requests_mock.last_request
    assert request.path == "/geo/1.0/zip"
    assert [value.lower() for value in request.qs["zip"]] == ["19104,us"]
    assert "q" not in request.qs


def test_geocoder_no_match(requests_mock):
    geocoder = OpenWeatherGeocoder(api_key="test", base_url=GEO_URL)
    requests_mock.get(f"{GEO_URL}/direct", json=[])

    with pytest.raises(LocationNotFound) as excinfo:
        asyncio.run(geocoder.geocode(CityRegion(city="Nowhere", region="ZZ")))

    assert str(excinfo.value) == "Error fetching location"


def test_geocoder_unknown_zip_is_network_error(requests_mock):
    geocoder = OpenWeatherGeocoder(api_key="test", base_url=GEO_URL)
    requests_mock.get(f"{GEO_URL}/zip", status_code=404, json={"cod": "404", "message": "not found"})

    with pytest.raises(NetworkError, match="HTTP 404"):
        asyncio.run(geocoder.geocode(PostalCode(postal_code="00000")))


def test_geocoder_payload_without_coordinates(requests_mock):
    geocoder = OpenWeatherGeocoder(api_key="test", base_url=GEO_URL)
    requests_mock.get(f"{GEO_URL}/zip", json={"zip": "19104"})

    with pytest.raises(NetworkError, match="invalid payload"):
        asyncio.run(geocoder.geocode(PostalCode(postal_code="19104")))


def test_weather_client_rejects_unfollowed_non_2xx(requests_mock):
    client = OpenWeatherClient(api_key="test", base_url=WEATHER_URL)
    requests_mock.get(WEATHER_URL, status_code=304)

    with pytest.raises(NetworkError, match="HTTP 304"):
        asyncio.run(client.fetch_weather(Coordinate(1.0, 1.0)))


def test_weather_client_rejects_non_finite_temperatures(requests_mock):
    client = OpenWeatherClient(api_key="test", base_url=WEATHER_URL)
    body = (
        '{"weather": [{"main": "Clear", "description": "clear sky", "icon": "01d"}],'
        ' "main": {"temp": NaN, "feels_like": Infinity, "temp_min": 290.0, "temp_max": 295.0, "humidity": 40}}'
    )
    requests_mock.get(WEATHER_URL, text=body, headers={"Content-Type": "application/json"})

    with pytest.raises(NetworkError, match="invalid payload"):
        asyncio.run(client.fetch_weather(Coordinate(1.0, 1.0)))
