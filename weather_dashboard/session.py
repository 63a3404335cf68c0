# ABOUTME: Session state for the dashboard: display unit, last temperature, and search history.
# ABOUTME: History is persisted as a JSON array in a single file; unit and temperature stay in memory.

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from weather_dashboard.models import TemperatureUnit
from weather_dashboard.presentation import convert_temperature

logger = logging.getLogger(__name__)

HISTORY_CAPACITY = 5
HISTORY_RECORD_NAME = "futureWeatherHistory.json"

_history_adapter = TypeAdapter(list[str])


class HistoryStore:
    """Durable record holding the recent-search list as JSON.

    The record is read on demand and overwritten wholesale on every update.
    """

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> list[str]:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return []
        except OSError:
            logger.warning("Could not read search history at %s", self.path, exc_info=True)
            return []
        try:
            return _history_adapter.validate_json(raw)
        except ValidationError:
            logger.warning("Ignoring malformed search history at %s", self.path)
            return []

    def save(self, history: list[str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(_history_adapter.dump_json(history))


class MemoryHistoryStore(HistoryStore):
    """History store that lives only as long as the process."""

    def __init__(self, history: list[str] | None = None):
        self._history = list(history or [])

    def load(self) -> list[str]:
        return list(self._history)

    def save(self, history: list[str]) -> None:
        self._history = list(history)


class SessionState:
    """Process-wide state owned by the application shell."""

    def __init__(
        self,
        store: HistoryStore | None = None,
        display_unit: TemperatureUnit = TemperatureUnit.FAHRENHEIT,
    ):
        self.store = store if store is not None else MemoryHistoryStore()
        self.display_unit = display_unit
        self.last_temperature_c: float | None = None

    def toggle_unit(self) -> int | None:
        """Flip between Celsius and Fahrenheit and return the re-derived temperature."""
        if self.display_unit is TemperatureUnit.CELSIUS:
            self.display_unit = TemperatureUnit.FAHRENHEIT
        else:
            self.display_unit = TemperatureUnit.CELSIUS
        return self.displayed_temperature()

    def record_temperature(self, celsius: float) -> None:
        self.last_temperature_c = celsius

    def displayed_temperature(self) -> int | None:
        if self.last_temperature_c is None:
            return None
        return convert_temperature(self.last_temperature_c, self.display_unit)

    def record_search(self, name: str) -> None:
        """Put a new name at the front of the history.

        Names already present keep their position.
        """
        history = self.store.load()
        if name in history:
            return
        history.insert(0, name)
        del history[HISTORY_CAPACITY:]
        self.store.save(history)

    def list_history(self) -> list[str]:
        return self.store.load()
