import pytest
from click.testing import CliRunner

from weathercast.cli import _subscribe_renderer, main
from weathercast.config import UnitSystem
from weathercast.network import RouteNetworkAvailability
from weathercast.state import AppState
from weathercast.weather.errors import NO_CONNECTION_MESSAGE
from weathercast.weather.formatting import LOADING_TEXT


@pytest.fixture
def runner(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    return CliRunner()


def test_now_requires_api_key(runner, monkeypatch):
    monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)

    result = runner.invoke(main, ["now", "--lat", "1", "--lon", "2"])

    assert result.exit_code == 1
    assert "OPENWEATHER_API_KEY is not set" in result.output


def test_now_without_network_prints_error(runner, monkeypatch):
    monkeypatch.setenv("OPENWEATHER_API_KEY", "key")
    monkeypatch.setattr(RouteNetworkAvailability, "is_available", lambda self: False)

    result = runner.invoke(main, ["now", "--lat", "52.52", "--lon", "13.41"])

    assert result.exit_code == 1
    assert NO_CONNECTION_MESSAGE in result.output


def test_now_reports_bad_config(runner, monkeypatch, tmp_path):
    monkeypatch.setenv("OPENWEATHER_API_KEY", "key")

    result = runner.invoke(
        main, ["now", "--lat", "1", "--lon", "2", "--config", str(tmp_path / "missing.yaml")]
    )

    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_watch_needs_both_coordinates(runner, monkeypatch):
    monkeypatch.setenv("OPENWEATHER_API_KEY", "key")

    result = runner.invoke(main, ["watch", "--lat", "1"])

    assert result.exit_code == 2
    assert "--lat and --lon must be given together" in result.output


@pytest.mark.parametrize(
    "args",
    [
        ["now", "--lat", "100", "--lon", "2"],
        ["now", "--lat", "1", "--lon", "-181"],
        ["watch", "--lat", "90.5", "--lon", "2"],
    ],
)
def test_out_of_range_coordinates_are_usage_errors(runner, monkeypatch, args):
    monkeypatch.setenv("OPENWEATHER_API_KEY", "key")

    result = runner.invoke(main, args)

    assert result.exit_code == 2
    assert "Invalid value" in result.output


class TestRenderer:
    @staticmethod
    def rendered(output):
        return [block.strip() for block in output.split("─" * 40) if block.strip()]

    def test_renders_each_state_change_once(self, capsys, make_snapshot):
        app_state = AppState()
        _subscribe_renderer(app_state, UnitSystem.METRIC)

        app_state.update_weather(make_snapshot())
        app_state.set_error("invalid API key")

        blocks = self.rendered(capsys.readouterr().out)
        assert len(blocks) == 3
        assert blocks[0] == LOADING_TEXT
        assert blocks[1].startswith("Berlin")
        assert blocks[2] == "invalid API key"

    def test_recovery_from_error_renders_report(self, capsys, make_snapshot):
        app_state = AppState()
        app_state.set_error("invalid API key")
        _subscribe_renderer(app_state, UnitSystem.METRIC)

        app_state.update_weather(make_snapshot())

        blocks = self.rendered(capsys.readouterr().out)
        assert blocks[0] == "invalid API key"
        assert blocks[1].startswith("Berlin")
        assert len(blocks) == 2

    def test_unsubscribe_stops_rendering(self, capsys):
        app_state = AppState()
        for unsubscribe in _subscribe_renderer(app_state, UnitSystem.METRIC):
            unsubscribe()
        capsys.readouterr()

        app_state.set_error("invalid API key")

        assert capsys.readouterr().out == ""
