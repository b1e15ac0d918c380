"""Configuration handling for task tracker."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

import yaml

from task_tracker.exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path("configs/tracker.yaml")

ENV_DATA_FILE = "TASK_TRACKER_FILE"
ENV_LOG_LEVEL = "TASK_TRACKER_LOG_LEVEL"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class Settings:
    """Runtime settings.

    Attributes:
        data_file: Path of the task record file.
        log_level: Logging level name.
        log_dir: Directory for log files, None to log to the console only.
        table_format: tabulate format used for task lists.
    """

    data_file: Path = Path("tasks.txt")
    log_level: str = "WARNING"
    log_dir: Optional[Path] = None
    table_format: str = "simple"

    def __post_init__(self) -> None:
        """Validate settings."""
        if self.log_level.upper() not in _LOG_LEVELS:
            valid = ", ".join(sorted(_LOG_LEVELS))
            raise ConfigError(f"Invalid log level '{self.log_level}'. Must be one of: {valid}")

    @property
    def level(self) -> int:
        """Numeric logging level."""
        return getattr(logging, self.log_level.upper())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Build settings from a config mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown config key(s): {', '.join(sorted(unknown))}")

        values = dict(data)
        if values.get("data_file") is not None:
            values["data_file"] = Path(values["data_file"])
        else:
            values.pop("data_file", None)
        if values.get("log_dir") is not None:
            values["log_dir"] = Path(values["log_dir"])
        if "log_level" in values:
            values["log_level"] = str(values["log_level"])
        return cls(**values)

    def with_env(self, environ: Optional[dict[str, str]] = None) -> Settings:
        """Return settings overridden by TASK_TRACKER_* environment variables."""
        environ = os.environ if environ is None else environ
        overrides: dict[str, Any] = {}
        if environ.get(ENV_DATA_FILE):
            overrides["data_file"] = Path(environ[ENV_DATA_FILE])
        if environ.get(ENV_LOG_LEVEL):
            overrides["log_level"] = environ[ENV_LOG_LEVEL]
        return replace(self, **overrides) if overrides else self


class ConfigManager:
    """Config Manager

    This class handles the YAML Config.
    """

    def __init__(self, path: str | Path = DEFAULT_CONFIG_PATH, required: bool = False) -> None:
        """Initialize Config Manager.

        Args:
            path: YAML config path
            required: Raise if the file is missing instead of using defaults
        """
        self.path = Path(path)
        self.required = required

    def load_config(self) -> dict[str, Any]:
        """Load YAML Config."""
        if not self.path.exists():
            if self.required:
                raise ConfigError(f"Config file not found: {self.path}")
            return {}

        try:
            with self.path.open(encoding="utf-8") as fp:
                config = yaml.safe_load(fp)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read config {self.path}: {e}") from e

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigError(f"Config {self.path} must be a mapping")
        return dict(config)

    def load_settings(self) -> Settings:
        """Load settings from the file and the environment."""
        return Settings.from_dict(self.load_config()).with_env()
