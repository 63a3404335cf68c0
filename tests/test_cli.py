# ABOUTME: Tests for the Typer command line front end.
# ABOUTME: Runs commands through CliRunner with mocked dependencies and a temporary history directory.

import json
import logging

import pytest
from conftest import routing_client
from pydantic import ValidationError
from typer.testing import CliRunner

from weather_dashboard import cli
from weather_dashboard.deps import DashboardDeps
from weather_dashboard.session import HISTORY_RECORD_NAME, SessionState
from weather_dashboard.weather_service import GEOCODING_URL

runner = CliRunner()


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("WEATHER_DASHBOARD_DATA_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def mock_deps(monkeypatch, happy_routes):
    """Replace create_deps so commands hit the routing mock instead of the network."""
    deps = DashboardDeps(http_client=routing_client(happy_routes), session=SessionState())
    monkeypatch.setattr(cli, "create_deps", lambda settings: deps)
    return deps


class TestSearchCommand:
    def test_prints_weather(self, data_dir, mock_deps):
        """search prints the rendered dashboard for the place.

        Implementation: Invokes `search Copenhagen --celsius` against canned payloads.
        Passing implies: The pipeline ran and its view was printed in Celsius.
        """
        result = runner.invoke(cli.app, ["search", "Copenhagen", "--celsius"])

        assert result.exit_code == 0, result.output
        assert "Copenhagen, Denmark" in result.output
        assert "20°C" in result.output
        assert "Rainy" in result.output
        mock_deps.http_client.aclose.assert_awaited_once()

    def test_not_found_exits_nonzero(self, data_dir, mock_deps, happy_routes):
        happy_routes[GEOCODING_URL] = {"results": []}

        result = runner.invoke(cli.app, ["search", "Xyzzyville"])

        assert result.exit_code == 1
        assert "City not found" in result.output


class TestLocateCommand:
    def test_without_device_position_fails(self, data_dir, mock_deps):
        result = runner.invoke(cli.app, ["locate"])

        assert result.exit_code == 1
        assert "Geolocation not supported" in result.output


class TestHistoryCommand:
    def test_lists_persisted_history(self, data_dir):
        """history prints the persisted names newest first.

        Implementation: Writes a history file into the configured data directory.
        Passing implies: The CLI reads the same record the dashboard writes.
        """
        (data_dir / HISTORY_RECORD_NAME).write_text(json.dumps(["Oslo", "Paris"]))

        result = runner.invoke(cli.app, ["history"])

        assert result.exit_code == 0
        assert result.output.split() == ["Oslo", "Paris"]

    def test_empty_history_prints_nothing(self, data_dir):
        result = runner.invoke(cli.app, ["history"])

        assert result.exit_code == 0
        assert result.output == ""


class TestConfigurationErrors:
    @pytest.mark.parametrize(
        "variable,value",
        [("WEATHER_DASHBOARD_TIMEOUT", "soon"), ("WEATHER_DASHBOARD_LATITUDE", "north")],
    )
    def test_bad_setting_exits_cleanly(self, data_dir, monkeypatch, variable, value):
        """An unparseable setting prints a configuration error instead of a traceback.

        Implementation: Sets a non-numeric timeout or latitude and runs `history`.
        Passing implies: Settings validation failures end in exit code 1 with a readable message.
        """
        monkeypatch.setenv(variable, value)

        result = runner.invoke(cli.app, ["history"])

        assert result.exit_code == 1
        assert "Configuration error" in result.output
        assert not isinstance(result.exception, ValidationError)


class TestMalformedProviderBody:
    def test_non_object_body_prints_banner(self, data_dir, mock_deps, happy_routes, caplog):
        """A non-object geocoder body ends the command with the banner, not a traceback.

        Implementation: Serves a JSON array from the geocoder and captures cli debug logs.
        Passing implies: The aborted command is logged and exits 1 with "Data unavailable".
        """
        happy_routes[GEOCODING_URL] = []

        with caplog.at_level(logging.DEBUG, logger="weather_dashboard.cli"):
            result = runner.invoke(cli.app, ["search", "Copenhagen"])

        assert result.exit_code == 1
        assert "Data unavailable" in result.output
        assert any("search command aborted" in record.getMessage() for record in caplog.records)
