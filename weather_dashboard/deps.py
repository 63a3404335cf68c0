# ABOUTME: Dependency container for the dashboard shell using Pydantic BaseModel.
# ABOUTME: Holds the httpx.AsyncClient, session state, and geolocation capability shared by a pipeline run.

import httpx
from pydantic import BaseModel, ConfigDict

from weather_dashboard.config import Settings
from weather_dashboard.location import FixedGeolocation, GeolocationProvider
from weather_dashboard.session import HISTORY_RECORD_NAME, HistoryStore, SessionState


class DashboardDeps(BaseModel):
    """Collaborators injected into the Dashboard shell."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    session: SessionState
    geolocation: GeolocationProvider | None = None


def create_http_client(timeout: float = 10.0) -> httpx.AsyncClient:
    """Create an httpx client with a fixed timeout.

    Failed requests are never retried; a timeout surfaces like any other HTTP error.
    """
    return httpx.AsyncClient(timeout=httpx.Timeout(timeout))


def create_deps(settings: Settings) -> DashboardDeps:
    """Wire up the default collaborators from settings."""
    geolocation = None
    if settings.has_device_position:
        geolocation = FixedGeolocation(settings.device_latitude, settings.device_longitude)
    return DashboardDeps(
        http_client=create_http_client(settings.timeout),
        session=SessionState(store=HistoryStore(settings.data_dir / HISTORY_RECORD_NAME)),
        geolocation=geolocation,
    )
