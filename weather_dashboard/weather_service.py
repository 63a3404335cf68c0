# ABOUTME: Service layer for Open-Meteo and BigDataCloud API calls and response parsing.
# ABOUTME: Handles geocoding, reverse geocoding, and the concurrent weather + air quality fetch.

import asyncio
import logging
from datetime import date

import httpx

from weather_dashboard.errors import DataUnavailable
from weather_dashboard.models import AirQualityBundle, DailyForecast, ResolvedLocation, WeatherBundle

logger = logging.getLogger(__name__)

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
WEATHER_URL = "https://api.open-meteo.com/v1/forecast"
AQI_URL = "https://air-quality-api.open-meteo.com/v1/air-quality"
REVERSE_GEO_URL = "https://api.bigdatacloud.net/data/reverse-geocode-client"

CURRENT_PARAMS = "temperature_2m,relative_humidity_2m,weather_code,wind_speed_10m"
DAILY_PARAMS = "weather_code,temperature_2m_max,temperature_2m_min"
AQI_PARAMS = "us_aqi"

REVERSE_FALLBACK_NAME = "Your Location"

# Failures of a single provider call that count as "data unavailable".
# ValueError also covers JSON decode errors and pydantic ValidationError.
PROVIDER_ERRORS = (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError)


async def geocode(client: httpx.AsyncClient, city_name: str) -> ResolvedLocation | None:
    """Geocode a city name to coordinates using Open-Meteo geocoding API."""
    resp = await client.get(
        GEOCODING_URL,
        params={"name": city_name, "count": 1, "language": "en", "format": "json"},
    )
    resp.raise_for_status()
    data = _json_object(resp)

    results = data.get("results")
    if not results:
        return None

    r = results[0]
    return ResolvedLocation(
        latitude=r["latitude"],
        longitude=r["longitude"],
        display_name=r["name"],
        country=r.get("country") or "",
    )


async def reverse_geocode(client: httpx.AsyncClient, latitude: float, longitude: float) -> ResolvedLocation:
    """Look up a display name and country for device coordinates.

    The city is preferred over the locality; when the provider knows neither the
    generic "Your Location" label is used.
    """
    resp = await client.get(
        REVERSE_GEO_URL,
        params={"latitude": latitude, "longitude": longitude, "localityLanguage": "en"},
    )
    resp.raise_for_status()
    data = _json_object(resp)

    return ResolvedLocation(
        latitude=latitude,
        longitude=longitude,
        display_name=data.get("city") or data.get("locality") or REVERSE_FALLBACK_NAME,
        country=data.get("countryName") or "",
    )


async def get_weather(client: httpx.AsyncClient, latitude: float, longitude: float) -> WeatherBundle:
    """Fetch current conditions and the daily forecast from Open-Meteo forecast API."""
    resp = await client.get(
        WEATHER_URL,
        params={
            "latitude": latitude,
            "longitude": longitude,
            "current": CURRENT_PARAMS,
            "daily": DAILY_PARAMS,
            "timezone": "auto",
        },
    )
    resp.raise_for_status()
    data = _json_object(resp)

    current = data["current"]
    daily = data["daily"]
    if not isinstance(current, dict) or not isinstance(daily, dict):
        raise ValueError("Weather response is missing its current or daily block")
    return WeatherBundle(
        current_temperature_c=current["temperature_2m"],
        current_humidity_pct=current["relative_humidity_2m"],
        current_wind_kph=current["wind_speed_10m"],
        current_condition_code=current["weather_code"],
        daily_forecast=parse_daily_data(daily),
    )


async def get_air_quality(client: httpx.AsyncClient, latitude: float, longitude: float) -> AirQualityBundle:
    """Fetch the current US AQI from Open-Meteo air quality API."""
    resp = await client.get(
        AQI_URL,
        params={"latitude": latitude, "longitude": longitude, "current": AQI_PARAMS},
    )
    resp.raise_for_status()
    data = _json_object(resp)

    return AirQualityBundle(current_us_aqi=data["current"]["us_aqi"])


async def fetch_all(
    client: httpx.AsyncClient, latitude: float, longitude: float
) -> tuple[WeatherBundle, AirQualityBundle]:
    """Fetch weather and air quality concurrently, failing if either leg fails.

    Both requests are always allowed to settle before the result (or the
    failure) is reported, so no request is left running in the background.
    """
    weather, air_quality = await asyncio.gather(
        get_weather(client, latitude, longitude),
        get_air_quality(client, latitude, longitude),
        return_exceptions=True,
    )
    for result in (weather, air_quality):
        if isinstance(result, PROVIDER_ERRORS):
            logger.warning("Data fetch failed for (%.4f, %.4f): %r", latitude, longitude, result)
            raise DataUnavailable() from result
        if isinstance(result, BaseException):
            raise result
    return weather, air_quality


def parse_daily_data(raw: dict) -> list[DailyForecast]:
    """Parse Open-Meteo column-oriented daily data into row-oriented DailyForecast objects."""
    dates = raw.get("time", [])
    if not dates:
        return []

    columns = [raw["weather_code"], raw["temperature_2m_max"], raw["temperature_2m_min"]]
    if any(len(col) != len(dates) for col in columns):
        raise ValueError("Daily forecast columns have mismatched lengths")

    result = []
    for d, code, max_temp, min_temp in zip(dates, *columns):
        result.append(
            DailyForecast(
                date=date.fromisoformat(d),
                condition_code=code,
                max_temp_c=max_temp,
                min_temp_c=min_temp,
            )
        )
    return result


def _json_object(resp: httpx.Response) -> dict:
    """Decode a response body that must be a JSON object."""
    data = resp.json()
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object from {resp.request.url}, got {type(data).__name__}")
    return data
