"""Unit tests for :mod:`logs.message_formatting`."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel

from logs.message_formatting import JsonEncodeOptions, encode_json, format_message


class Order(BaseModel):
    order_id: int
    placed_at: datetime


class Arrayable:
    def to_array(self):
        return {"kind": "arrayable"}


class Jsonable:
    def to_json(self):
        return '{"kind":"jsonable"}'


@dataclass
class Opaque:
    value: int


def test_strings_pass_through_unchanged():
    assert format_message("payment failed") == "payment failed"
    assert format_message("payment failed", json_encode=False) == "payment failed"
    assert format_message('{"already": "json"}') == '{"already": "json"}'


def test_mapping_is_compact_json_by_default():
    assert format_message({"a": 1, "b": [2, 3]}) == '{"a":1,"b":[2,3]}'


def test_pretty_print_option():
    options = JsonEncodeOptions(pretty_print=True)
    assert format_message({"a": 1}, json_options=options) == '{\n    "a": 1\n}'


def test_unicode_and_slash_options():
    value = {"city": "Köln", "url": "https://example.com/x"}

    assert encode_json(value) == '{"city":"K\\u00f6ln","url":"https:\\/\\/example.com\\/x"}'
    relaxed = JsonEncodeOptions(unescaped_unicode=True, unescaped_slashes=True)
    assert encode_json(value, relaxed) == '{"city":"Köln","url":"https://example.com/x"}'


def test_json_encoding_handles_models_and_dates():
    order = Order(order_id=7, placed_at=datetime(2024, 3, 5, 9, 30))

    decoded = json.loads(format_message({"order": order, "when": datetime(2024, 1, 2)}))

    assert decoded == {
        "order": {"order_id": 7, "placed_at": "2024-03-05T09:30:00"},
        "when": "2024-01-02T00:00:00",
    }


def test_json_encoding_uses_array_representation_then_str():
    decoded = json.loads(format_message([Arrayable(), Opaque(3)]))

    assert decoded == [{"kind": "arrayable"}, "Opaque(value=3)"]


def test_dump_without_json_for_containers():
    assert format_message({"a": 1}, json_encode=False) == "{'a': 1}"
    assert format_message([1, 2], json_encode=False) == "[1, 2]"


def test_dump_without_json_prefers_array_representation():
    assert format_message(Arrayable(), json_encode=False) == "{'kind': 'arrayable'}"


def test_self_serialising_objects_without_json():
    assert format_message(Jsonable(), json_encode=False) == '{"kind":"jsonable"}'


def test_other_values_are_returned_unchanged_without_json():
    opaque = Opaque(1)
    assert format_message(opaque, json_encode=False) is opaque
    assert format_message(42, json_encode=False) == 42
