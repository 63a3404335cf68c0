# ABOUTME: Application shell running one resolve, fetch and derive pipeline per user action.
# ABOUTME: Owns the status banner and the last successfully rendered view; errors never clear that view.

import logging
import time
from collections.abc import Awaitable, Callable
from datetime import date

from weather_dashboard.deps import DashboardDeps
from weather_dashboard.errors import DashboardError, DataUnavailable, EmptyQuery
from weather_dashboard.location import LocationResolver
from weather_dashboard.models import DashboardView, ResolvedLocation, StatusBanner
from weather_dashboard.presentation import build_view
from weather_dashboard.weather_service import fetch_all

logger = logging.getLogger(__name__)

ERROR_BANNER_SECONDS = 3.0


class Dashboard:
    """Drives pipeline runs and keeps the state the UI layer paints.

    Overlapping runs are not serialized: whichever finishes last replaces the view.
    """

    def __init__(
        self,
        deps: DashboardDeps,
        clock: Callable[[], float] = time.monotonic,
        today: Callable[[], date] = date.today,
    ):
        self.deps = deps
        self.session = deps.session
        self.resolver = LocationResolver(deps.http_client, deps.session, deps.geolocation)
        self.view: DashboardView | None = None
        self._banner: StatusBanner | None = None
        self._clock = clock
        self._today = today

    async def search_city(self, query: str) -> DashboardView | None:
        """Search by place name. Empty queries are ignored without a message."""
        if not query or not query.strip():
            return None
        self._show_status("Searching...")
        return await self._run(lambda: self.resolver.resolve_by_name(query))

    async def use_current_location(self) -> DashboardView | None:
        self._show_status("Locating...")
        return await self._run(self.resolver.resolve_by_device)

    def toggle_units(self) -> DashboardView | None:
        """Switch the display unit and re-derive the headline temperature without fetching."""
        temperature = self.session.toggle_unit()
        if self.view is not None and temperature is not None:
            self.view = self.view.model_copy(
                update={"temperature": temperature, "unit": self.session.display_unit}
            )
        return self.view

    def history(self) -> list[str]:
        return self.session.list_history()

    @property
    def status(self) -> StatusBanner | None:
        """The banner currently visible, if any. Error banners expire on their own."""
        banner = self._banner
        if banner is not None and banner.is_error and self._clock() - banner.shown_at >= ERROR_BANNER_SECONDS:
            self._banner = None
            return None
        return banner

    async def _run(self, resolve: Callable[[], Awaitable[ResolvedLocation]]) -> DashboardView | None:
        try:
            location = await resolve()
            self._show_status("Updating...")
            weather, air_quality = await fetch_all(
                self.deps.http_client, location.latitude, location.longitude
            )
            view = build_view(location, weather, air_quality, self.session.display_unit, self._today())
        except EmptyQuery:
            return None
        except DashboardError as e:
            logger.info("Pipeline aborted: %s", e.message)
            self._show_error(e.message)
            return None
        except Exception:
            # Unexpected provider failures still end as a banner; the last view stays
            logger.exception("Pipeline failed on an unexpected provider error")
            self._show_error(DataUnavailable.message)
            return None

        self.session.record_temperature(weather.current_temperature_c)
        self.view = view
        self._banner = None
        logger.info("Rendered weather for %s", location.display_name)
        return view

    def _show_status(self, message: str) -> None:
        self._banner = StatusBanner(message=message, shown_at=self._clock())

    def _show_error(self, message: str) -> None:
        self._banner = StatusBanner(message=message, is_error=True, shown_at=self._clock())
