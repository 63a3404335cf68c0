# ABOUTME: Environment-driven settings for the weather dashboard, loaded via python-dotenv.
# ABOUTME: Covers the history data directory, HTTP timeout, optional fixed device position, and log level.

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_DATA_DIR = Path.home() / ".weather_dashboard"


class Settings(BaseModel):
    """Runtime configuration read from the environment."""

    data_dir: Path = DEFAULT_DATA_DIR
    timeout: float = 10.0
    device_latitude: float | None = None
    device_longitude: float | None = None
    log_level: str = "WARNING"

    @property
    def has_device_position(self) -> bool:
        return self.device_latitude is not None and self.device_longitude is not None


def load_settings() -> Settings:
    """Read settings from the environment, after loading any .env file."""
    load_dotenv()
    values = {
        "data_dir": os.environ.get("WEATHER_DASHBOARD_DATA_DIR"),
        "timeout": os.environ.get("WEATHER_DASHBOARD_TIMEOUT"),
        "device_latitude": os.environ.get("WEATHER_DASHBOARD_LATITUDE"),
        "device_longitude": os.environ.get("WEATHER_DASHBOARD_LONGITUDE"),
        "log_level": os.environ.get("LOG_LEVEL"),
    }
    return Settings(**{k: v for k, v in values.items() if v})
