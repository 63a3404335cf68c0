# ABOUTME: Terminal front end for the weather dashboard built on Typer and Rich.
# ABOUTME: Runs one pipeline per command and prints the resulting render instructions or the error banner.

import asyncio
import logging

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from weather_dashboard.config import Settings, load_settings
from weather_dashboard.dashboard import Dashboard
from weather_dashboard.deps import create_deps
from weather_dashboard.models import DashboardView, TemperatureUnit
from weather_dashboard.session import HISTORY_RECORD_NAME, HistoryStore, SessionState

console = Console()
app = typer.Typer(help="Current weather, air quality and a five-day forecast for any place.")
logger = logging.getLogger(__name__)


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _load_settings_or_exit() -> Settings:
    try:
        settings = load_settings()
    except ValidationError as exc:
        console.print(f"[bold red]Configuration error:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    _configure_logging(settings)
    return settings


def render_view(view: DashboardView) -> Table:
    """Lay out a DashboardView as a Rich table."""
    place = f"{view.location_name}, {view.country}" if view.country else view.location_name
    table = Table(title=f"{place}\n{view.date_label}")
    table.add_column("Key")
    table.add_column("Value")
    table.add_row("Temperature", f"{view.temperature}°{view.unit.value}")
    table.add_row("Condition", f"{view.condition.label} ({view.condition.icon.value})")
    table.add_row("Humidity", f"{view.humidity_pct:g}%")
    table.add_row("Wind", f"{view.wind_kph:g} km/h")
    table.add_row("Air quality", f"{view.aqi} {view.air_quality.label}")
    for day in view.forecast:
        table.add_row(day.weekday, f"{day.icon.value}  {day.max_temp}° / {day.min_temp}°")
    return table


def _run_pipeline(action: str, query: str | None, celsius: bool) -> None:
    settings = _load_settings_or_exit()

    async def _run() -> tuple[DashboardView | None, str | None]:
        deps = create_deps(settings)
        if celsius:
            deps.session.display_unit = TemperatureUnit.CELSIUS
        dashboard = Dashboard(deps)
        try:
            if action == "search":
                view = await dashboard.search_city(query or "")
            else:
                view = await dashboard.use_current_location()
        finally:
            await deps.http_client.aclose()
        banner = dashboard.status
        return view, banner.message if banner is not None and banner.is_error else None

    view, error = asyncio.run(_run())
    if error is not None:
        logger.debug("%s command aborted: %s", action, error)
        console.print(f"[bold red]⚠️ {error}[/]")
        raise typer.Exit(code=1)
    if view is not None:
        console.print(render_view(view))


@app.command()
def search(
    city: str = typer.Argument(..., help="Place name to look up."),
    celsius: bool = typer.Option(False, "--celsius", "-c", help="Show the temperature in Celsius."),
) -> None:
    """Show the weather for a place name and remember it in the search history."""
    _run_pipeline("search", city, celsius)


@app.command()
def locate(
    celsius: bool = typer.Option(False, "--celsius", "-c", help="Show the temperature in Celsius."),
) -> None:
    """Show the weather for the configured device position."""
    _run_pipeline("locate", None, celsius)


@app.command()
def history() -> None:
    """List recent searches, newest first."""
    settings = _load_settings_or_exit()
    session = SessionState(store=HistoryStore(settings.data_dir / HISTORY_RECORD_NAME))
    for name in session.list_history():
        console.print(name)


if __name__ == "__main__":
    app()
