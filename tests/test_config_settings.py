"""Tests for configuration settings loading."""

import importlib
from pathlib import Path

import pytest

ENV_KEYS = [
    "FILE_LOG_DIR",
    "LOG_STORAGE_DIR",
    "FILE_LOG_FILENAME_FORMAT",
    "FILE_LOG_DATE_FORMAT",
    "FILE_LOG_DEFAULT_NAME",
    "FILE_LOG_TIMEZONE",
    "FILE_LOG_JSON_ENCODE",
    "FILE_LOG_JSON_PRETTY",
    "FILE_LOG_JSON_UNESCAPED_UNICODE",
    "FILE_LOG_JSON_UNESCAPED_SLASHES",
]


def reload_settings():
    config_module = importlib.import_module("config.config")
    importlib.reload(config_module)
    return config_module.settings


def ensure_clean_env(monkeypatch):
    monkeypatch.setenv("SETTINGS_SKIP_DOTENV", "1")
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults(monkeypatch):
    ensure_clean_env(monkeypatch)

    settings = reload_settings()

    expected = Path(__file__).resolve().parents[1] / "log_storage" / "logs"
    assert settings.file_log_dir == expected
    assert settings.file_log_filename_format == "{name}-{date}"
    assert settings.file_log_date_format == "%Y-%m-%d"
    assert settings.file_log_default_name == "filewriter"
    assert settings.file_log_timezone is None
    assert settings.file_log_json_encode is True
    assert settings.file_log_json_pretty is False
    assert settings.file_log_json_unescaped_unicode is False
    assert settings.file_log_json_unescaped_slashes is False


def test_log_dir_respects_env(monkeypatch, tmp_path):
    ensure_clean_env(monkeypatch)
    monkeypatch.setenv("FILE_LOG_DIR", str(tmp_path / "custom"))

    settings = reload_settings()

    assert settings.file_log_dir == tmp_path / "custom"


def test_legacy_log_storage_alias(monkeypatch, tmp_path):
    ensure_clean_env(monkeypatch)
    monkeypatch.setenv("LOG_STORAGE_DIR", str(tmp_path / "legacy"))

    settings = reload_settings()

    assert settings.file_log_dir == (tmp_path / "legacy").resolve()


def test_encoding_flags_from_env(monkeypatch):
    ensure_clean_env(monkeypatch)
    monkeypatch.setenv("FILE_LOG_JSON_ENCODE", "false")
    monkeypatch.setenv("FILE_LOG_JSON_PRETTY", "yes")
    monkeypatch.setenv("FILE_LOG_JSON_UNESCAPED_UNICODE", "1")
    monkeypatch.setenv("FILE_LOG_TIMEZONE", "Europe/Berlin")

    settings = reload_settings()

    assert settings.file_log_json_encode is False
    assert settings.file_log_json_pretty is True
    assert settings.file_log_json_unescaped_unicode is True
    assert settings.file_log_timezone == "Europe/Berlin"


def test_filename_format_must_keep_placeholders(monkeypatch):
    ensure_clean_env(monkeypatch)
    monkeypatch.setenv("FILE_LOG_FILENAME_FORMAT", "{name}.daily")

    with pytest.raises(ValueError):
        reload_settings()

    monkeypatch.delenv("FILE_LOG_FILENAME_FORMAT")
    reload_settings()
