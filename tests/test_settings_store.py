"""Tests for settings loading and tagged logging."""

import json

import pytest

from utils import settings_store
from utils.file_utils import load_json, load_json_list
from utils.log_utils import _format_message, log


@pytest.fixture
def settings_file(tmp_path, monkeypatch):
    """Point the settings store at a temporary file."""
    path = tmp_path / "settings.json"
    monkeypatch.setenv("VOICE_NAV_SETTINGS", str(path))
    yield path
    monkeypatch.delenv("VOICE_NAV_SETTINGS")
    settings_store.refresh_settings()


class TestSettingsStore:
    """Test suite for the settings cache."""

    def test_defaults_when_file_missing(self, settings_file):
        """Test defaults when no settings file exists."""
        settings = settings_store.refresh_settings()
        assert settings["tab_match_threshold"] == 30
        assert "{query}" in settings["search_engine_url"]

    def test_file_overrides_defaults(self, settings_file):
        """Test that the settings file overrides defaults."""
        settings_file.write_text(json.dumps({"tab_match_threshold": 45, "log_level": "DEEP"}))
        settings = settings_store.refresh_settings()
        assert settings["tab_match_threshold"] == 45
        assert settings["playwright_headless"] is False
        assert settings_store.is_deep_logging() is True

    def test_get_settings_returns_copy(self, settings_file):
        """Test that callers get a copy of the cache."""
        settings_store.refresh_settings()
        settings = settings_store.get_settings()
        settings["tab_match_threshold"] = 1
        assert settings_store.get_settings()["tab_match_threshold"] == 30

    def test_deep_log_only_when_enabled(self, settings_file, capsys):
        """Test that deep_log is silent unless log_level is DEEP."""
        settings_store.refresh_settings()
        settings_store.deep_log("[DEEP][TEST] hidden")
        assert capsys.readouterr().err == ""

        settings_file.write_text(json.dumps({"log_level": "deep"}))
        settings_store.refresh_settings()
        settings_store.deep_log("[DEEP][TEST] shown")
        assert "[TEST][DEEP] shown" in capsys.readouterr().err

    def test_invalid_json(self, settings_file):
        """Test that invalid JSON raises ValueError."""
        settings_file.write_text("{not json")
        with pytest.raises(ValueError, match="Invalid JSON"):
            settings_store.refresh_settings()


class TestFileUtils:
    """Test suite for JSON file helpers."""

    def test_load_json_missing(self, tmp_path):
        """Test that a missing file reads as {}."""
        assert load_json(tmp_path / "missing.json") == {}

    def test_load_json_non_object(self, tmp_path):
        """Test that a non-object file reads as {}."""
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        assert load_json(path) == {}

    def test_load_json_list_rejects_object(self, tmp_path):
        """Test that load_json_list rejects objects."""
        path = tmp_path / "obj.json"
        path.write_text("{}")
        with pytest.raises(ValueError):
            load_json_list(path)


class TestLogUtils:
    """Test suite for tagged console logging."""

    @pytest.mark.parametrize("message,expected", [
        ("[DEEP][ENGINE] hello", "[ENGINE][DEEP] hello"),
        ("[TAB_CTRL] Activated", "[TAB_CTRL] Activated"),
        ("[ENGINE][ERROR] boom", "[ENGINE][ERROR] boom"),
        ("[A][B][C] x", "[A][B] [C] x"),
        ("plain text", "[NAV] plain text"),
    ])
    def test_format_message(self, message, expected):
        """Test tag normalization."""
        assert _format_message(message) == expected

    def test_log_writes_stderr(self, capsys):
        """Test that log() writes to stderr."""
        log("MAIN", "ready", "INFO")
        err = capsys.readouterr().err
        assert err.rstrip().endswith("[MAIN][INFO] ready")
