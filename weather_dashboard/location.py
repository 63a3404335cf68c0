# ABOUTME: Location resolver turning a search string or device position into a ResolvedLocation.
# ABOUTME: Defines the geolocation capability protocol and its fixed/denied implementations.

import logging
from typing import Protocol, runtime_checkable

import httpx

from weather_dashboard.errors import (
    DataUnavailable,
    EmptyQuery,
    GeolocationUnsupported,
    NotFound,
    PermissionDenied,
    ReverseLookupFailed,
)
from weather_dashboard.models import Coordinates, ResolvedLocation
from weather_dashboard.session import SessionState
from weather_dashboard.weather_service import PROVIDER_ERRORS, geocode, reverse_geocode

logger = logging.getLogger(__name__)

DEVICE_FALLBACK_NAME = "Current Location"


@runtime_checkable
class GeolocationProvider(Protocol):
    """Device capability reporting the current position."""

    async def current_position(self) -> Coordinates:
        """Return the device coordinates, raising PermissionDenied if access is refused."""
        ...


class FixedGeolocation:
    """Geolocation capability that always reports the same coordinates."""

    def __init__(self, latitude: float, longitude: float):
        self.coordinates = Coordinates(latitude=latitude, longitude=longitude)

    async def current_position(self) -> Coordinates:
        return self.coordinates


class DeniedGeolocation:
    """Geolocation capability whose user refused access."""

    async def current_position(self) -> Coordinates:
        raise PermissionDenied()


class LocationResolver:
    """Resolves a query into coordinates plus a display name.

    Name searches are recorded into the session history on success; device
    lookups are not.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        session: SessionState,
        geolocation: GeolocationProvider | None = None,
    ):
        self.http_client = http_client
        self.session = session
        self.geolocation = geolocation

    async def resolve_by_name(self, query: str) -> ResolvedLocation:
        query = query.strip() if query else ""
        if not query:
            raise EmptyQuery()

        try:
            location = await geocode(self.http_client, query)
        except PROVIDER_ERRORS as e:
            raise DataUnavailable() from e
        if location is None:
            raise NotFound()

        self.session.record_search(location.display_name)
        return location

    async def resolve_by_device(self) -> ResolvedLocation:
        if self.geolocation is None:
            raise GeolocationUnsupported()

        position = await self.geolocation.current_position()
        try:
            return await self._reverse_lookup(position)
        except ReverseLookupFailed:
            logger.warning(
                "Reverse lookup failed for (%.4f, %.4f), using placeholder name",
                position.latitude,
                position.longitude,
                exc_info=True,
            )
            return ResolvedLocation(
                latitude=position.latitude,
                longitude=position.longitude,
                display_name=DEVICE_FALLBACK_NAME,
                country="",
            )

    async def _reverse_lookup(self, position: Coordinates) -> ResolvedLocation:
        try:
            return await reverse_geocode(self.http_client, position.latitude, position.longitude)
        except Exception as e:
            # Any failure here only costs the display name
            raise ReverseLookupFailed() from e
