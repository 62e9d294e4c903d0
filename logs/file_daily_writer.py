"""Per-channel daily log files.

A :class:`DailyFileLogWriter` keeps one :class:`logging.Logger` per
``(channel, day)`` pair, each bound to ``<path>/<channel>-<YYYY-MM-DD>.log``.
Handles are created on the first write of the day and reused until the
writer is closed, so a date rollover simply opens a new file.

Example::

    writer = DailyFileLogWriter(Path("log_storage/logs"))
    writer.route("orders", ["error", "payment failed"])
    writer.route("orders", ["retry scheduled"])   # info level
    writer.warning("written to filewriter-<date>.log")
"""

from __future__ import annotations

import logging
import re
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

from logs.levels import DEFAULT_LEVEL, LOWEST_LEVEL, level_number, match_level
from logs.line_formatter import LineFormatter
from logs.message_formatting import (
    PRETTY_UNICODE,
    JsonEncodeOptions,
    encode_json,
    format_message,
)
from utils.datetime_formatting import (
    DEFAULT_DATE_FORMAT,
    Clock,
    current_datetime,
    format_date_stamp,
    resolve_zone,
)

DEFAULT_NAME = "filewriter"
DEFAULT_FILENAME_FORMAT = "{name}-{date}"

_SAFE_NAME = re.compile(r"[^A-Za-z0-9_.-]+")


class WriteFailureError(OSError):
    """Raised when a daily log file cannot be opened or written."""


class MalformedContextError(TypeError):
    """Raised when the context of a log call is not a string-keyed mapping."""


class _RaisingFileHandler(logging.FileHandler):
    """File handler that lets write errors reach the caller."""

    def handleError(self, record: logging.LogRecord) -> None:
        # Called from within emit()'s except block, so this re-raises the write error.
        raise


def _sanitise(name: str) -> str:
    cleaned = _SAFE_NAME.sub("_", name).strip("._")
    if not cleaned:
        raise ValueError(f"Logger name {name!r} does not yield a usable filename")
    return cleaned


def _validate_context(context: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    if context is None:
        return {}
    if not isinstance(context, Mapping):
        raise MalformedContextError(
            f"Log context must be a mapping, got {type(context).__name__}"
        )
    for key in context:
        if not isinstance(key, str):
            raise MalformedContextError(f"Log context keys must be strings, got {key!r}")
    return dict(context)


class DailyFileLogWriter:
    """Route log calls to one file per logical name and calendar day."""

    def __init__(
        self,
        path: Path,
        msg_json_encode: bool = True,
        json_options: Optional[JsonEncodeOptions] = None,
        *,
        filename_format: str = DEFAULT_FILENAME_FORMAT,
        date_format: str = DEFAULT_DATE_FORMAT,
        default_name: str = DEFAULT_NAME,
        timezone: Optional[str] = None,
        clock: Optional[Clock] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if "{name}" not in filename_format or "{date}" not in filename_format:
            raise ValueError(
                f"filename_format must contain '{{name}}' and '{{date}}': {filename_format!r}"
            )
        self.path = Path(path)
        self.msg_json_encode = msg_json_encode
        self.json_options = json_options or JsonEncodeOptions()
        self.filename_format = filename_format
        self.date_format = date_format
        self.default_name = default_name
        self.zone = resolve_zone(timezone)
        self._clock = clock
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self._file_loggers: Dict[str, logging.Logger] = {}
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------
    def write_log(
        self,
        level: str,
        name: str,
        message: Any,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Write *message* at *level* to today's file for *name*.

        Raises
        ------
        UnknownLevelError
            If *level* is not one of the recognised level names.
        MalformedContextError
            If *context* is not a mapping with string keys.
        WriteFailureError
            If the log file cannot be opened or appended to.
        """

        number = level_number(level)
        payload = _validate_context(context)
        if not isinstance(name, str) or not name:
            raise ValueError("Logger name must be a non-empty string")

        formatted = self.format_message(message)
        now = current_datetime(self.zone, clock=self._clock)
        timed_filename = self.timed_filename(name, now)

        with self._lock:
            file_logger = self._file_logger(timed_filename, name)
            try:
                # Names that sanitise to the same file share a handle, so the
                # channel and time travel with each record.
                file_logger.log(
                    number,
                    formatted,
                    extra={"context": payload, "channel": name, "logged_at": now},
                )
            except OSError as exc:
                raise WriteFailureError(
                    f"Failed to write to {self._log_path(timed_filename)}: {exc}"
                ) from exc

    def timed_filename(self, name: str, now: Optional[datetime] = None) -> str:
        """Return the file basename (without ``.log``) used for *name* on *now*'s day."""

        today = now if now is not None else current_datetime(self.zone, clock=self._clock)
        return self.filename_format.replace("{name}", _sanitise(name)).replace(
            "{date}", format_date_stamp(today, self.date_format)
        )

    def format_message(self, message: Any) -> Any:
        return format_message(
            message, json_encode=self.msg_json_encode, json_options=self.json_options
        )

    def _log_path(self, timed_filename: str) -> Path:
        return self.path / f"{timed_filename}.log"

    def _file_logger(self, timed_filename: str, name: str) -> logging.Logger:
        file_logger = self._file_loggers.get(timed_filename)
        if file_logger is not None:
            return file_logger

        log_path = self._log_path(timed_filename)
        try:
            handler = _RaisingFileHandler(log_path, mode="a", encoding="utf-8")
        except OSError as exc:
            raise WriteFailureError(f"Failed to open log file {log_path}: {exc}") from exc
        handler.setLevel(LOWEST_LEVEL)
        handler.setFormatter(
            LineFormatter(
                allow_inline_line_breaks=True,
                include_stacktraces=True,
                zone=self.zone,
            )
        )

        # Not registered with logging.getLogger: the handle belongs to this writer only.
        file_logger = logging.Logger(name, LOWEST_LEVEL)
        file_logger.propagate = False
        file_logger.addHandler(handler)

        self._file_loggers[timed_filename] = file_logger
        self.logger.debug("Opened daily log file %s for channel %s", log_path, name)
        return file_logger

    # ------------------------------------------------------------------
    # Dynamic channels
    # ------------------------------------------------------------------
    def route(
        self,
        name: str,
        args: Sequence[Any],
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Write to the channel *name* using ``(level, message)`` or ``(message,)``.

        A leading level name (any case) is only taken as the level when a
        message follows it; otherwise the first argument is the message and
        the level is ``info``.
        """

        if not args:
            raise TypeError(f"route() for channel {name!r} requires a message")

        level = match_level(args[0]) if len(args) > 1 else None
        if level is None:
            level, message = DEFAULT_LEVEL, args[0]
        else:
            message = args[1]
        self.write_log(level, name, message, context)

    def channel(self, name: str) -> Callable[..., None]:
        """Return a callable that routes its arguments to the channel *name*."""

        def _log(*args: Any, context: Optional[Mapping[str, Any]] = None) -> None:
            self.route(name, args, context)

        _log.__name__ = name
        return _log

    # ------------------------------------------------------------------
    # Default channel
    # ------------------------------------------------------------------
    def log(self, level: str, message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
        self.write_log(level, self.default_name, message, context)

    def pretty(self, message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
        """Write *message* as indented JSON with readable unicode at debug level."""

        self.write_log(
            "debug", self.default_name, encode_json(message, PRETTY_UNICODE), context
        )

    def emergency(self, message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
        self.write_log("emergency", self.default_name, message, context)

    def alert(self, message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
        self.write_log("alert", self.default_name, message, context)

    def critical(self, message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
        self.write_log("critical", self.default_name, message, context)

    def error(self, message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
        self.write_log("error", self.default_name, message, context)

    def warning(self, message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
        self.write_log("warning", self.default_name, message, context)

    def notice(self, message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
        self.write_log("notice", self.default_name, message, context)

    def info(self, message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
        self.write_log("info", self.default_name, message, context)

    def debug(self, message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
        self.write_log("debug", self.default_name, message, context)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def handles(self) -> Tuple[str, ...]:
        """Timed filenames that currently have an open handle."""

        with self._lock:
            return tuple(self._file_loggers)

    def close(self) -> None:
        """Close every open file handle and forget them."""

        with self._lock:
            for timed_filename, file_logger in self._file_loggers.items():
                for handler in list(file_logger.handlers):
                    file_logger.removeHandler(handler)
                    try:
                        handler.close()
                    except OSError as exc:
                        self.logger.warning(
                            "Failed to close log file %s: %s",
                            self._log_path(timed_filename),
                            exc,
                        )
            self._file_loggers.clear()

    def __enter__(self) -> "DailyFileLogWriter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = [
    "DEFAULT_FILENAME_FORMAT",
    "DEFAULT_NAME",
    "DailyFileLogWriter",
    "MalformedContextError",
    "WriteFailureError",
]
