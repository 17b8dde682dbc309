from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from weathercast.config.models import (
    LocationSettings,
    OrchestratorSettings,
    WeatherSettings,
)


class AppConfig(BaseModel):
    """Main application configuration"""

    weather: WeatherSettings = Field(default_factory=WeatherSettings)
    location: LocationSettings = Field(default_factory=LocationSettings)
    orchestrator: OrchestratorSettings = Field(default_factory=OrchestratorSettings)


def load_config(path: str | Path) -> AppConfig:
    """
    Load and validate hierarchical YAML config.

    Raises:
        FileNotFoundError: if the file does not exist
        RuntimeError: for YAML syntax errors or validation errors
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {p}")

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise RuntimeError(f"Invalid YAML in {p}: {e}") from e

    try:
        return AppConfig.model_validate(raw)
    except ValidationError as e:
        raise RuntimeError(f"Invalid config values in {p}:\n{e}") from e
