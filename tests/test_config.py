import pytest
from pydantic import ValidationError

from weathercast.config import (
    AppConfig,
    LocationSettings,
    UnitSystem,
    WeatherEnv,
    WeatherSettings,
    load_config,
)


class TestLoadConfig:
    def test_reads_nested_sections(self, tmp_path):
        path = tmp_path / "weathercast.yaml"
        path.write_text(
            "weather:\n"
            "  base_url: http://localhost:8080/data/\n"
            "  units: imperial\n"
            "location:\n"
            "  interval_ms: 60000\n"
            "orchestrator:\n"
            "  discard_stale_responses: true\n",
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.weather.base_url == "http://localhost:8080/data/"
        assert config.weather.units == UnitSystem.IMPERIAL
        assert config.location.interval_ms == 60000
        assert config.location.min_update_interval_ms == 5000
        assert config.orchestrator.discard_stale_responses is True
        assert config.orchestrator.clear_snapshot_on_error is False

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(path) == AppConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("weather: [unclosed", encoding="utf-8")

        with pytest.raises(RuntimeError, match="Invalid YAML"):
            load_config(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("weather:\n  units: kelvin\n", encoding="utf-8")

        with pytest.raises(RuntimeError, match="Invalid config values"):
            load_config(path)


class TestSettings:
    def test_defaults_match_openweather(self):
        settings = WeatherSettings()

        assert settings.base_url == "https://api.openweathermap.org/data/"
        assert settings.units == UnitSystem.METRIC

    def test_base_url_must_be_http(self):
        with pytest.raises(ValidationError):
            WeatherSettings(base_url="ftp://example.com")

    def test_min_interval_cannot_exceed_interval(self):
        with pytest.raises(ValidationError):
            LocationSettings(interval_ms=1000, min_update_interval_ms=2000)


class TestWeatherEnv:
    def test_reads_api_key_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("OPENWEATHER_API_KEY", "abc123")

        env = WeatherEnv()

        assert env.openweather_api_key == "abc123"
        assert env.weathercast_log_level == "WARNING"

    def test_api_key_is_required(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)

        with pytest.raises(ValidationError):
            WeatherEnv()
