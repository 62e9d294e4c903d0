"""
config/config.py

Purpose
-------
Centralized settings for the daily file log writer.
- Normalizes environment variable names across legacy and canonical variants.
- Provides typed, safe defaults for the log directory, filename template,
  date format and JSON encoding of structured messages.

Notes for Maintainers
---------------------
- ``.env`` files are loaded on import unless ``SETTINGS_SKIP_DOTENV=1``.
- ``FILE_LOG_DIR`` wins over the legacy ``LOG_STORAGE_DIR`` alias.

Examples
--------
# Bash:
export FILE_LOG_DIR=/var/log/shop
export FILE_LOG_JSON_PRETTY=true
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if os.getenv("SETTINGS_SKIP_DOTENV") != "1":
    load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parents[1]


# -----------------------------
# Helper functions
# -----------------------------
def _coalesce_env(*names: str, default: Optional[str] = None) -> Optional[str]:
    """Return the first non-empty environment variable from *names*."""
    for name in names:
        val = os.getenv(name)
        if val is not None and str(val).strip() != "":
            return val
    return default


def _parse_bool(value: Optional[str], *, default: bool) -> bool:
    if value is None:
        return default
    v = str(value).strip().lower()
    return v in {"1", "true", "yes", "y", "on"}


def _resolve_dir(value: Optional[str], *, default: Path) -> Path:
    if value is None:
        return default
    candidate = Path(value).expanduser()
    if not candidate.is_absolute():
        candidate = PROJECT_ROOT / candidate
    return candidate.resolve()


# -----------------------------
# Main Settings
# -----------------------------
class Settings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=False)

    # --- Storage ---
    file_log_dir: Path = Field(
        default_factory=lambda: _resolve_dir(
            _coalesce_env("FILE_LOG_DIR", "LOG_STORAGE_DIR"),
            default=PROJECT_ROOT / "log_storage" / "logs",
        )
    )

    # --- Filenames ---
    file_log_filename_format: str = Field(
        default_factory=lambda: _coalesce_env("FILE_LOG_FILENAME_FORMAT")
        or "{name}-{date}"
    )
    file_log_date_format: str = Field(
        default_factory=lambda: _coalesce_env("FILE_LOG_DATE_FORMAT") or "%Y-%m-%d"
    )
    file_log_default_name: str = Field(
        default_factory=lambda: _coalesce_env("FILE_LOG_DEFAULT_NAME") or "filewriter"
    )
    file_log_timezone: Optional[str] = Field(
        default_factory=lambda: _coalesce_env("FILE_LOG_TIMEZONE")
    )

    # --- Message encoding ---
    file_log_json_encode: bool = Field(
        default_factory=lambda: _parse_bool(
            _coalesce_env("FILE_LOG_JSON_ENCODE"), default=True
        )
    )
    file_log_json_pretty: bool = Field(
        default_factory=lambda: _parse_bool(
            _coalesce_env("FILE_LOG_JSON_PRETTY"), default=False
        )
    )
    file_log_json_unescaped_unicode: bool = Field(
        default_factory=lambda: _parse_bool(
            _coalesce_env("FILE_LOG_JSON_UNESCAPED_UNICODE"), default=False
        )
    )
    file_log_json_unescaped_slashes: bool = Field(
        default_factory=lambda: _parse_bool(
            _coalesce_env("FILE_LOG_JSON_UNESCAPED_SLASHES"), default=False
        )
    )

    @field_validator("file_log_filename_format")
    @classmethod
    def _require_placeholders(cls, v: str) -> str:
        missing = [token for token in ("{name}", "{date}") if token not in v]
        if missing:
            raise ValueError(
                f"FILE_LOG_FILENAME_FORMAT must contain {', '.join(missing)}: {v!r}"
            )
        return v


# Singleton settings instance
settings = Settings()
