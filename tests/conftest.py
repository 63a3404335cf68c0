# ABOUTME: Shared test fixtures for the weather dashboard test suite.
# ABOUTME: Provides canned Open-Meteo/BigDataCloud payloads and a URL-routing mock HTTP client.

from unittest.mock import AsyncMock

import httpx
import pytest

from weather_dashboard.weather_service import AQI_URL, GEOCODING_URL, REVERSE_GEO_URL, WEATHER_URL

GEOCODE_PAYLOAD = {
    "results": [
        {
            "latitude": 55.6761,
            "longitude": 12.5683,
            "timezone": "Europe/Copenhagen",
            "name": "Copenhagen",
            "country": "Denmark",
        }
    ]
}

WEATHER_PAYLOAD = {
    "latitude": 55.68,
    "longitude": 12.57,
    "timezone": "Europe/Copenhagen",
    "current": {
        "time": "2025-01-15T12:00",
        "temperature_2m": 20.0,
        "relative_humidity_2m": 81,
        "weather_code": 61,
        "wind_speed_10m": 14.3,
    },
    "daily": {
        "time": [
            "2025-01-15",
            "2025-01-16",
            "2025-01-17",
            "2025-01-18",
            "2025-01-19",
            "2025-01-20",
            "2025-01-21",
        ],
        "weather_code": [61, 0, 3, 45, 73, 95, 2],
        "temperature_2m_max": [5.2, 6.5, 4.4, 3.0, -0.5, 7.9, 8.1],
        "temperature_2m_min": [-1.3, 0.2, -2.6, -3.5, -6.0, 1.1, 2.0],
    },
}

AQI_PAYLOAD = {"latitude": 55.68, "longitude": 12.57, "current": {"time": "2025-01-15T12:00", "us_aqi": 42}}

REVERSE_PAYLOAD = {"city": "Copenhagen", "locality": "Indre By", "countryName": "Denmark"}


def make_response(json_data, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code=status_code, json=json_data, request=httpx.Request("GET", "https://test"))


def routing_client(routes: dict) -> AsyncMock:
    """Create a mock httpx.AsyncClient answering GETs by URL.

    Route values are JSON payloads, httpx.Response objects, or exceptions to raise.
    """
    mock = AsyncMock(spec=httpx.AsyncClient)

    async def _get(url, params=None, **kwargs):
        answer = routes[url]
        if isinstance(answer, BaseException):
            raise answer
        if isinstance(answer, httpx.Response):
            return answer
        return make_response(answer)

    mock.get.side_effect = _get
    return mock


@pytest.fixture
def happy_routes() -> dict:
    return {
        GEOCODING_URL: GEOCODE_PAYLOAD,
        REVERSE_GEO_URL: REVERSE_PAYLOAD,
        WEATHER_URL: WEATHER_PAYLOAD,
        AQI_URL: AQI_PAYLOAD,
    }
