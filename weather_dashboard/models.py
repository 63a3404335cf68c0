# ABOUTME: Pydantic BaseModels and enumerated tags for the weather dashboard pipeline.
# ABOUTME: Covers resolved locations, Open-Meteo bundles, derived presentation state and render instructions.

from datetime import date
from enum import Enum

from pydantic import BaseModel


class TemperatureUnit(str, Enum):
    """Display unit for the headline temperature."""

    CELSIUS = "C"
    FAHRENHEIT = "F"


class Theme(str, Enum):
    """Visual theme derived from a weather condition code."""

    CLEAR = "clear"
    CLOUDY = "cloudy"
    RAIN = "rain"
    SNOW = "snow"
    THUNDER = "thunder"


class WeatherIcon(str, Enum):
    """Icon tag for a weather condition."""

    SUN = "sun"
    CLOUD_SUN = "cloud-sun"
    SMOG = "smog"
    CLOUD_RAIN = "cloud-rain"
    SNOWFLAKE = "snowflake"
    BOLT = "bolt"
    CLOUD = "cloud"


class AqiSeverity(str, Enum):
    """Severity tier of a US AQI reading."""

    GOOD = "good"
    MODERATE = "moderate"
    UNHEALTHY = "unhealthy"
    DANGEROUS = "dangerous"


class AmbientGlow(str, Enum):
    """Background glow accompanying a theme."""

    WARM = "warm"
    DEEP = "deep"
    DEFAULT = "default"


class Coordinates(BaseModel):
    """A latitude/longitude pair reported by a device."""

    latitude: float
    longitude: float


class ResolvedLocation(BaseModel):
    """Location resolved from a text search or a device position."""

    latitude: float
    longitude: float
    display_name: str
    country: str = ""


class DailyForecast(BaseModel):
    """One day of the Open-Meteo daily forecast."""

    date: date
    condition_code: int
    max_temp_c: float
    min_temp_c: float


class WeatherBundle(BaseModel):
    """Current conditions plus the daily forecast, today first."""

    current_temperature_c: float
    current_humidity_pct: float
    current_wind_kph: float
    current_condition_code: int
    daily_forecast: list[DailyForecast] = []


class AirQualityBundle(BaseModel):
    """Current reading from the Open-Meteo air quality endpoint."""

    current_us_aqi: int


class ConditionInfo(BaseModel):
    """Label, icon and theme for a weather condition code."""

    label: str
    icon: WeatherIcon
    theme: Theme


class AirQualityInfo(BaseModel):
    """Label and severity tag for a US AQI value."""

    label: str
    severity: AqiSeverity


class ForecastDayView(BaseModel):
    """A single row of the five-day forecast list."""

    date: date
    weekday: str
    icon: WeatherIcon
    max_temp: int
    min_temp: int


class DashboardView(BaseModel):
    """Render instructions produced by one successful pipeline run.

    Only tags and values live here; turning them into markup is the job of the UI layer.
    """

    location_name: str
    country: str
    date_label: str
    temperature: int
    unit: TemperatureUnit
    humidity_pct: float
    wind_kph: float
    aqi: int
    air_quality: AirQualityInfo
    condition: ConditionInfo
    glow: AmbientGlow
    forecast: list[ForecastDayView] = []


class StatusBanner(BaseModel):
    """Transient status line shown above the dashboard."""

    message: str
    is_error: bool = False
    shown_at: float = 0.0
