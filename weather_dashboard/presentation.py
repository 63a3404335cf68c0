# ABOUTME: Pure mapping from raw weather/AQI numbers to presentation tags and render instructions.
# ABOUTME: Classifies WMO condition codes and US AQI, converts temperatures, picks the forecast window.

import math
from datetime import date

from weather_dashboard.errors import InsufficientForecastData
from weather_dashboard.models import (
    AirQualityBundle,
    AirQualityInfo,
    AmbientGlow,
    AqiSeverity,
    ConditionInfo,
    DailyForecast,
    DashboardView,
    ForecastDayView,
    ResolvedLocation,
    TemperatureUnit,
    Theme,
    WeatherBundle,
    WeatherIcon,
)

FORECAST_DAYS = 5

# (lowest code, highest code or None for open-ended, info), checked in order
CONDITION_TABLE: list[tuple[int, int | None, ConditionInfo]] = [
    (0, 0, ConditionInfo(label="Clear Sky", icon=WeatherIcon.SUN, theme=Theme.CLEAR)),
    (1, 3, ConditionInfo(label="Partly Cloudy", icon=WeatherIcon.CLOUD_SUN, theme=Theme.CLOUDY)),
    (45, 48, ConditionInfo(label="Foggy", icon=WeatherIcon.SMOG, theme=Theme.CLOUDY)),
    (51, 67, ConditionInfo(label="Rainy", icon=WeatherIcon.CLOUD_RAIN, theme=Theme.RAIN)),
    (71, 77, ConditionInfo(label="Snowfall", icon=WeatherIcon.SNOWFLAKE, theme=Theme.SNOW)),
    (95, None, ConditionInfo(label="Thunderstorm", icon=WeatherIcon.BOLT, theme=Theme.THUNDER)),
]

UNKNOWN_CONDITION = ConditionInfo(label="Unknown", icon=WeatherIcon.CLOUD, theme=Theme.CLOUDY)

# (inclusive upper bound, info), checked in order
AIR_QUALITY_TIERS: list[tuple[int, AirQualityInfo]] = [
    (50, AirQualityInfo(label="Good", severity=AqiSeverity.GOOD)),
    (100, AirQualityInfo(label="Moderate", severity=AqiSeverity.MODERATE)),
    (150, AirQualityInfo(label="Unhealthy", severity=AqiSeverity.UNHEALTHY)),
]

DANGEROUS_AIR = AirQualityInfo(label="Dangerous", severity=AqiSeverity.DANGEROUS)


def classify_condition(code: int) -> ConditionInfo:
    """Map a WMO weather code to its label, icon and theme."""
    for low, high, info in CONDITION_TABLE:
        if code >= low and (high is None or code <= high):
            return info
    return UNKNOWN_CONDITION


def classify_air_quality(value: int) -> AirQualityInfo:
    """Map a US AQI value to its tier. Each tier includes its upper bound."""
    for upper, info in AIR_QUALITY_TIERS:
        if value <= upper:
            return info
    return DANGEROUS_AIR


def ambient_glow(theme: Theme) -> AmbientGlow:
    if theme is Theme.CLEAR:
        return AmbientGlow.WARM
    if theme is Theme.RAIN:
        return AmbientGlow.DEEP
    return AmbientGlow.DEFAULT


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going toward positive infinity."""
    whole = math.floor(value)
    return whole + 1 if value - whole >= 0.5 else whole


def convert_temperature(celsius: float, unit: TemperatureUnit) -> int:
    """Convert a Celsius reading to the whole-degree value shown in the given unit."""
    if unit is TemperatureUnit.FAHRENHEIT:
        return round_half_up(celsius * 9 / 5 + 32)
    return round_half_up(celsius)


def select_forecast_window(daily_forecast: list[DailyForecast]) -> list[DailyForecast]:
    """Return the next five days, skipping today at index 0."""
    if len(daily_forecast) < FORECAST_DAYS + 1:
        raise InsufficientForecastData(
            f"Forecast data incomplete ({len(daily_forecast)} of {FORECAST_DAYS + 1} days)"
        )
    return daily_forecast[1 : FORECAST_DAYS + 1]


def format_date_label(day: date) -> str:
    """Long date label, e.g. "Monday, October 19"."""
    return f"{day.strftime('%A')}, {day.strftime('%B')} {day.day}"


def build_view(
    location: ResolvedLocation,
    weather: WeatherBundle,
    air_quality: AirQualityBundle,
    unit: TemperatureUnit,
    today: date,
) -> DashboardView:
    """Assemble the render instructions for one successful fetch.

    Raises InsufficientForecastData before anything is built when the forecast
    is too short, so callers never see a partial view.
    """
    window = select_forecast_window(weather.daily_forecast)
    condition = classify_condition(weather.current_condition_code)

    forecast = [
        ForecastDayView(
            date=day.date,
            weekday=day.date.strftime("%a"),
            icon=classify_condition(day.condition_code).icon,
            max_temp=round_half_up(day.max_temp_c),
            min_temp=round_half_up(day.min_temp_c),
        )
        for day in window
    ]

    return DashboardView(
        location_name=location.display_name,
        country=location.country,
        date_label=format_date_label(today),
        temperature=convert_temperature(weather.current_temperature_c, unit),
        unit=unit,
        humidity_pct=weather.current_humidity_pct,
        wind_kph=weather.current_wind_kph,
        aqi=air_quality.current_us_aqi,
        air_quality=classify_air_quality(air_quality.current_us_aqi),
        condition=condition,
        glow=ambient_glow(condition.theme),
        forecast=forecast,
    )
