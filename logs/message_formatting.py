"""Turn arbitrary log payloads into the text written to daily log files."""

from __future__ import annotations

import json
import pprint
from datetime import date, datetime
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict


class JsonEncodeOptions(BaseModel):
    """Flags controlling how structured messages are JSON encoded.

    With every flag off the output is compact, non-ASCII characters are
    written as ``\\uXXXX`` escapes and forward slashes as ``\\/``.
    """

    pretty_print: bool = False
    unescaped_unicode: bool = False
    unescaped_slashes: bool = False

    model_config = ConfigDict(frozen=True)


PRETTY_UNICODE = JsonEncodeOptions(pretty_print=True, unescaped_unicode=True)

_ARRAY_METHODS = ("model_dump", "to_dict", "to_array")
_JSON_METHODS = ("model_dump_json", "to_json")


def _call_first(value: Any, method_names: tuple) -> tuple:
    for method_name in method_names:
        method = getattr(value, method_name, None)
        if callable(method):
            return True, method()
    return False, None


def _json_default(value: Any) -> Any:
    """Fallback serialiser for values :mod:`json` cannot encode natively."""

    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    found, representation = _call_first(value, _ARRAY_METHODS)
    if found:
        return representation
    if isinstance(value, (set, frozenset)):
        return list(value)
    return str(value)


def encode_json(value: Any, options: Optional[JsonEncodeOptions] = None) -> str:
    """Encode *value* as JSON text according to *options*."""

    options = options or JsonEncodeOptions()
    if options.pretty_print:
        text = json.dumps(
            value,
            ensure_ascii=not options.unescaped_unicode,
            indent=4,
            default=_json_default,
        )
    else:
        text = json.dumps(
            value,
            ensure_ascii=not options.unescaped_unicode,
            separators=(",", ":"),
            default=_json_default,
        )
    if not options.unescaped_slashes:
        text = text.replace("/", "\\/")
    return text


def format_message(
    message: Any,
    *,
    json_encode: bool = True,
    json_options: Optional[JsonEncodeOptions] = None,
) -> Any:
    """Return the representation of *message* handed to the log handler.

    Strings pass through untouched. With ``json_encode`` every other value is
    JSON encoded. Without it, mappings, sequences and objects exposing an
    array representation are rendered with :func:`pprint.pformat`, objects
    that can serialise themselves to JSON use that, and anything else is
    returned as-is for the logging backend to coerce.
    """

    if isinstance(message, str):
        return message

    if json_encode:
        return encode_json(message, json_options)

    if isinstance(message, (Mapping, list, tuple)):
        return pprint.pformat(message)

    found, representation = _call_first(message, _ARRAY_METHODS)
    if found:
        return pprint.pformat(representation)

    found, representation = _call_first(message, _JSON_METHODS)
    if found:
        return representation

    return message


__all__ = [
    "JsonEncodeOptions",
    "PRETTY_UNICODE",
    "encode_json",
    "format_message",
]
