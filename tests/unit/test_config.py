"""Tests for ResultsConfig."""

import json
from pathlib import Path

import pytest

from wave_results.config import CONFIG_PATH, ResultsConfig


class TestResultsConfigDefaults:
    """Default configuration values."""

    def test_defaults(self):
        config = ResultsConfig()

        assert config.results_directory == "results"
        assert config.report_command == ["wptreport"]
        assert config.indent == 2

    def test_config_path(self):
        assert CONFIG_PATH == Path.home() / ".config" / "wave-results" / "config.json"


class TestResultsConfigLoad:
    """Loading from file and environment."""

    @pytest.fixture(autouse=True)
    def clear_env(self, monkeypatch):
        for name in ("WAVE_RESULTS_DIR", "WAVE_SESSIONS_DIR", "WAVE_STORE_DIR", "WAVE_REPORT_COMMAND"):
            monkeypatch.delenv(name, raising=False)

    def test_missing_file_returns_defaults(self, tmp_path):
        assert ResultsConfig.load(path=tmp_path / "nope.json") == ResultsConfig()

    def test_file_values_and_unknown_keys(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"results_directory": "/data/results", "bogus": 1}))

        config = ResultsConfig.load(path=path)

        assert config.results_directory == "/data/results"
        assert config.results_path == Path("/data/results")

    def test_invalid_json_uses_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{broken")

        assert ResultsConfig.load(path=path) == ResultsConfig()

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"results_directory": "/from/file"}))
        monkeypatch.setenv("WAVE_RESULTS_DIR", "/from/env")
        monkeypatch.setenv("WAVE_REPORT_COMMAND", "python -m wptreport")

        config = ResultsConfig.load(path=path)

        assert config.results_directory == "/from/env"
        assert config.report_command == ["python", "-m", "wptreport"]

    def test_save_then_load(self, tmp_path):
        path = tmp_path / "nested" / "config.json"
        config = ResultsConfig(results_directory="/r", indent=4)

        config.save(path)

        assert ResultsConfig.load(path) == config
