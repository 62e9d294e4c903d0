"""Utility helpers for initializing daily per-channel file log writers."""

from pathlib import Path
from typing import Any, Optional, Union

from .file_daily_writer import (
    DailyFileLogWriter,
    MalformedContextError,
    WriteFailureError,
)
from .levels import LEVEL_NAMES, UnknownLevelError
from .message_formatting import JsonEncodeOptions, format_message
from config import config as _config

__all__ = [
    "DailyFileLogWriter",
    "JsonEncodeOptions",
    "LEVEL_NAMES",
    "MalformedContextError",
    "UnknownLevelError",
    "WriteFailureError",
    "format_message",
    "get_file_log_writer",
]


def get_file_log_writer(
    path: Optional[Union[str, Path]] = None,
    **overrides: Any,
) -> DailyFileLogWriter:
    """Return a new :class:`DailyFileLogWriter` configured from settings.

    Parameters
    ----------
    path:
        Optional explicit log directory. When omitted, the value is read from
        the ``FILE_LOG_DIR`` (or ``LOG_STORAGE_DIR``) environment variable.
    overrides:
        Keyword arguments forwarded to :class:`DailyFileLogWriter`, taking
        precedence over the configured values (e.g. ``clock`` or
        ``msg_json_encode``).

    The directory is created when missing. Every call builds a fresh writer;
    callers that want a shared instance keep and pass the returned object
    themselves and call :meth:`DailyFileLogWriter.close` when done.
    """

    settings = _config.settings
    target = Path(path) if path is not None else settings.file_log_dir
    target.mkdir(parents=True, exist_ok=True)

    options: dict = {
        "msg_json_encode": settings.file_log_json_encode,
        "json_options": JsonEncodeOptions(
            pretty_print=settings.file_log_json_pretty,
            unescaped_unicode=settings.file_log_json_unescaped_unicode,
            unescaped_slashes=settings.file_log_json_unescaped_slashes,
        ),
        "filename_format": settings.file_log_filename_format,
        "date_format": settings.file_log_date_format,
        "default_name": settings.file_log_default_name,
        "timezone": settings.file_log_timezone,
    }
    options.update(overrides)
    return DailyFileLogWriter(target, **options)
