# src/qst/config.py: Pydantic models for configuration.
# Defines the immutable configuration handed to the process supervisor and the
# optional user settings file ('config.yaml' in the user config directory)
# that provides defaults for the command-line options.

from __future__ import annotations

import yaml
from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from typing import Literal, Optional

from .util.paths import get_config_home, expand_path
from .util.errors import ConfigError

Step = Literal["build", "run", "test"]

# --- Pydantic Models ---

class SupervisorConfig(BaseModel):
    """Everything the supervisor needs, fixed at construction."""
    model_config = ConfigDict(frozen=True)

    command: str = Field(min_length=1)
    delay: float = Field(1.0, ge=0)
    auto_restart: bool = False

class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

class Settings(BaseModel):
    delay: float = Field(1.0, ge=0)
    autorestart: bool = False
    step: Step = "run"
    poll_interval: float = Field(1.0, gt=0)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# --- Settings Loading ---

def default_settings_path() -> Path:
    return get_config_home() / "config.yaml"

def load_settings(path: Optional[Path] = None) -> Settings:
    """
    Loads and validates the settings file.

    A missing file at the default location is not an error, it just means
    built-in defaults apply. A missing file given explicitly is.
    """
    settings_path = expand_path(path) if path else default_settings_path()
    if not settings_path.is_file():
        if path:
            raise ConfigError(f"Settings file not found: '{settings_path}'.")
        return Settings()

    try:
        with open(settings_path, "r") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing YAML settings '{settings_path}': {e}")

    try:
        return Settings.model_validate(raw or {})
    except ValidationError as e:
        raise ConfigError(f"Settings validation failed: {e}")
