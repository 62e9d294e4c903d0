"""Line oriented formatter used by the daily log files."""

from __future__ import annotations

import logging
import traceback
from datetime import datetime, tzinfo
from typing import Any, Dict, List, Mapping, Optional

from logs.message_formatting import JsonEncodeOptions, encode_json
from utils.datetime_formatting import format_log_timestamp

DEFAULT_LINE_FORMAT = "[{datetime}] {channel}.{level_name}: {message} {context}"

_CONTEXT_JSON = JsonEncodeOptions(unescaped_unicode=True, unescaped_slashes=True)


class LineFormatter(logging.Formatter):
    """Render one record per line: timestamp, channel, level, message, context.

    The record's ``context`` attribute (set through ``extra``) is appended as
    compact JSON and left out entirely when empty. Exceptions found in the
    context are summarised inline and, with ``include_stacktraces``, their
    traceback follows on the next lines. Without ``allow_inline_line_breaks``
    every newline in the rendered record is collapsed to a space.

    ``channel`` and ``logged_at`` attributes, when present, take precedence
    over the logger name and the record's creation time.
    """

    def __init__(
        self,
        line_format: str = DEFAULT_LINE_FORMAT,
        *,
        allow_inline_line_breaks: bool = True,
        include_stacktraces: bool = True,
        zone: Optional[tzinfo] = None,
    ) -> None:
        super().__init__()
        self.line_format = line_format
        self.allow_inline_line_breaks = allow_inline_line_breaks
        self.include_stacktraces = include_stacktraces
        self.zone = zone

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        created = getattr(record, "logged_at", None)
        if created is None:
            created = datetime.fromtimestamp(record.created, self.zone)
        if datefmt:
            return created.strftime(datefmt)
        return format_log_timestamp(created) or ""

    def format(self, record: logging.LogRecord) -> str:
        context = getattr(record, "context", None) or {}
        stacktraces: List[str] = []
        rendered_context = self._normalise(context, stacktraces)

        if record.exc_info:
            stacktraces.append("".join(traceback.format_exception(*record.exc_info)))

        line = self.line_format.format(
            datetime=self.formatTime(record),
            channel=getattr(record, "channel", None) or record.name,
            level_name=record.levelname,
            message=record.getMessage(),
            context=encode_json(rendered_context, _CONTEXT_JSON) if rendered_context else "",
        ).rstrip()

        if self.include_stacktraces and stacktraces:
            line = line + "\n[stacktrace]\n" + "\n".join(
                trace.rstrip("\n") for trace in stacktraces
            )

        if not self.allow_inline_line_breaks:
            line = line.replace("\r\n", " ").replace("\n", " ")
        return line

    def _normalise(self, value: Any, stacktraces: List[str]) -> Any:
        if isinstance(value, BaseException):
            if self.include_stacktraces:
                stacktraces.append(
                    "".join(
                        traceback.format_exception(type(value), value, value.__traceback__)
                    )
                )
            return f"[object] ({type(value).__name__}: {value})"
        if isinstance(value, Mapping):
            normalised: Dict[str, Any] = {}
            for key, item in value.items():
                normalised[str(key)] = self._normalise(item, stacktraces)
            return normalised
        if isinstance(value, (list, tuple)):
            return [self._normalise(item, stacktraces) for item in value]
        return value


__all__ = ["DEFAULT_LINE_FORMAT", "LineFormatter"]
