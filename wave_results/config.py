"""
Configuration management for wave-results.

Settings come from ~/.config/wave-results/config.json, with environment
variables taking priority over the file.
"""

import json
import os
import shlex
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

CONFIG_PATH = Path.home() / ".config" / "wave-results" / "config.json"

DEFAULT_REPORT_COMMAND = ["wptreport"]


def _filter_dataclass_fields(data: dict[str, Any], cls: type) -> dict[str, Any]:
    """Filter dict to only include fields that exist in the dataclass."""
    valid_fields = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in valid_fields}


@dataclass
class ResultsConfig:
    """
    Locations and external commands used by the results layer.

    results_directory holds per-session archives and comparison reports.
    sessions_directory and store_directory back the file-based session
    registry and result store.
    """

    results_directory: str = "results"
    sessions_directory: str = "sessions"
    store_directory: str = "store"
    report_command: list[str] = field(default_factory=lambda: list(DEFAULT_REPORT_COMMAND))
    indent: int = 2

    @property
    def results_path(self) -> Path:
        return Path(self.results_directory).expanduser()

    @property
    def sessions_path(self) -> Path:
        return Path(self.sessions_directory).expanduser()

    @property
    def store_path(self) -> Path:
        return Path(self.store_directory).expanduser()

    @classmethod
    def load(cls, path: Path | None = None) -> "ResultsConfig":
        """
        Load config from file with defaults, then apply env overrides.

        Priority order:
        1. WAVE_RESULTS_DIR / WAVE_SESSIONS_DIR / WAVE_STORE_DIR /
           WAVE_REPORT_COMMAND environment variables
        2. Values in the config file
        3. Dataclass defaults

        Args:
            path: Optional config file path. Defaults to CONFIG_PATH

        Returns:
            ResultsConfig instance
        """
        if path is None:
            path = CONFIG_PATH

        data: dict[str, Any] = {}
        if path.exists():
            try:
                data = json.loads(path.read_text())
            except (json.JSONDecodeError, OSError):
                # Use defaults on error
                data = {}

        config = cls(**_filter_dataclass_fields(data, cls))

        env_value = os.getenv("WAVE_RESULTS_DIR")
        if env_value:
            config.results_directory = env_value
        env_value = os.getenv("WAVE_SESSIONS_DIR")
        if env_value:
            config.sessions_directory = env_value
        env_value = os.getenv("WAVE_STORE_DIR")
        if env_value:
            config.store_directory = env_value
        env_value = os.getenv("WAVE_REPORT_COMMAND")
        if env_value:
            config.report_command = shlex.split(env_value)

        return config

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        if path is None:
            path = CONFIG_PATH

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(
                {
                    "results_directory": self.results_directory,
                    "sessions_directory": self.sessions_directory,
                    "store_directory": self.store_directory,
                    "report_command": self.report_command,
                    "indent": self.indent,
                },
                f,
                indent=2,
            )


# Default configuration instance
default_config = ResultsConfig()


__all__ = [
    "CONFIG_PATH",
    "DEFAULT_REPORT_COMMAND",
    "ResultsConfig",
    "default_config",
]
