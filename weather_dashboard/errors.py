# ABOUTME: Exception taxonomy for the resolve, fetch and derive pipeline.
# ABOUTME: Every error carries the short message the status banner shows to the user.


class DashboardError(Exception):
    """Base class for pipeline failures that end up in the status banner."""

    message = "Something went wrong"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class EmptyQuery(DashboardError):
    """Search text was empty. Never shown to the user."""

    message = "Empty search"


class NotFound(DashboardError):
    message = "City not found"


class GeolocationUnsupported(DashboardError):
    message = "Geolocation not supported"


class PermissionDenied(DashboardError):
    message = "Permission denied"


class ReverseLookupFailed(DashboardError):
    """Reverse geocoding failed. Only degrades the display name."""

    message = "Reverse lookup failed"


class DataUnavailable(DashboardError):
    message = "Data unavailable"


class InsufficientForecastData(DashboardError):
    message = "Forecast data incomplete"
