"""Tests for spark/config.py, spark/workspace.py and spark/logs.py."""

import logging

from spark.config import AISettings, Settings, ensure_config, load_settings
from spark.logs import setup_logger
from spark.workspace import config_path, get_user_timezone, workspace_root


def test_load_settings_from_workspace(workspace):
    settings = load_settings(workspace)
    assert settings.timezone == "UTC"
    assert settings.log_level == "DEBUG"
    assert settings.ai.api_key_env == "SPARK_TEST_KEY"


def test_settings_defaults_when_missing(tmp_path):
    settings = load_settings(tmp_path)
    assert settings == Settings()
    assert settings.ai.model == "gemini-2.5-flash"


def test_settings_invalid_values_fall_back():
    settings = Settings.from_dict({"timezone": "Mars/Olympus", "log_level": "loud"})
    assert settings.timezone == "UTC"
    assert settings.log_level == "INFO"


def test_api_key_from_env(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    ai = AISettings()
    assert ai.api_key() == ""
    monkeypatch.setenv("API_KEY", "legacy")
    assert ai.api_key() == "legacy"
    monkeypatch.setenv("GEMINI_API_KEY", "primary")
    assert ai.api_key() == "primary"


def test_ensure_config_writes_defaults_once(tmp_path):
    path = ensure_config(tmp_path)
    assert path == config_path(tmp_path)
    assert load_settings(tmp_path) == Settings()
    path.write_text("timezone: Europe/Berlin\n", encoding="utf-8")
    ensure_config(tmp_path)
    assert load_settings(tmp_path).timezone == "Europe/Berlin"


def test_workspace_root_from_env(workspace):
    assert workspace_root() == workspace.resolve()


def test_get_user_timezone_bad_value_is_utc(tmp_path):
    config_path(tmp_path).write_text("timezone: Not/AZone\n", encoding="utf-8")
    assert str(get_user_timezone(tmp_path)) == "UTC"


def test_setup_logger_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "spark.log"
    root = setup_logger(log_file, "INFO")
    try:
        logging.getLogger("spark.test").info("hello diagnostics")
        for h in root.handlers:
            h.flush()
        assert "hello diagnostics" in log_file.read_text(encoding="utf-8")
    finally:
        for h in list(root.handlers):
            if getattr(h, "baseFilename", None) == str(log_file):
                root.removeHandler(h)
                h.close()
