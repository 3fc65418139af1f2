"""Tests for configuration loading."""

import json
from pathlib import Path

import pytest

from finhealth.core.config import CONFIG_FILENAME, AppConfig, load_config
from finhealth.core.exceptions import ConfigError


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_file(self, tmp_path, monkeypatch) -> None:
        """Test defaults when no config file exists."""
        monkeypatch.chdir(tmp_path)
        config = load_config()
        assert config == AppConfig()
        assert config.currency == "USD"
        assert config.data_dir == Path.home() / ".finhealth"

    def test_file_in_working_directory(self, tmp_path, monkeypatch) -> None:
        """Test that finhealth.json in the working directory is read."""
        (tmp_path / CONFIG_FILENAME).write_text(
            json.dumps({"currency": "EUR", "session": "family", "autosave": False}),
            encoding="utf-8",
        )
        monkeypatch.chdir(tmp_path)

        config = load_config()

        assert config.currency == "EUR"
        assert config.session == "family"
        assert config.autosave is False

    def test_explicit_path(self, tmp_path) -> None:
        """Test loading an explicit config path."""
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"data_dir": str(tmp_path / "d")}), encoding="utf-8")
        assert load_config(path).data_dir == tmp_path / "d"

    def test_missing_explicit_path(self, tmp_path) -> None:
        """Test that a missing explicit path is an error."""
        with pytest.raises(ConfigError):
            load_config(tmp_path / "absent.json")

    def test_invalid_currency(self, tmp_path) -> None:
        """Test that a malformed currency code is rejected."""
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"currency": "dollars"}), encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_invalid_json(self, tmp_path) -> None:
        """Test that unparsable JSON is rejected."""
        path = tmp_path / "c.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_invalid_log_level(self, tmp_path) -> None:
        """Test that an unknown log level is rejected."""
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"log_level": "LOUD"}), encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path)
