"""Unit tests for typed structured-output conversion."""
from __future__ import annotations

import json
from typing import List

import pytest
from pydantic import BaseModel

from crux_llmclient.base.errors import StructuredOutputError
from crux_llmclient.base.structured_output import StructuredOutputConverter, extract_json_text


class Forecast(BaseModel):
    city: str
    high: int
    tags: List[str] = []


def test_format_instructions_embed_schema():
    text = StructuredOutputConverter(Forecast).format_instructions()
    assert text.startswith("Your response should be in JSON format.")  # nosec B101
    schema = json.loads(text.split("schema: ", 1)[1].splitlines()[0])
    assert schema["properties"]["city"]["type"] == "string"  # nosec B101


def test_convert_plain_json():
    out = StructuredOutputConverter(Forecast).convert('{"city":"Oslo","high":4}')
    assert out == Forecast(city="Oslo", high=4)  # nosec B101


def test_convert_fenced_json_with_prose():
    reply = 'Sure! Here it is:\n```json\n{"city": "Rome", "high": 21, "tags": ["sunny"]}\n```\nEnjoy.'
    assert StructuredOutputConverter(Forecast).convert(reply).tags == ["sunny"]  # nosec B101


def test_convert_nested_object_in_prose():
    reply = 'Result -> {"city": "Lima", "high": 19, "tags": ["{not a brace}"]} (done)'
    assert StructuredOutputConverter(Forecast).convert(reply).city == "Lima"  # nosec B101


def test_convert_list_type():
    items = StructuredOutputConverter(List[Forecast]).convert('[{"city":"A","high":1},{"city":"B","high":2}]')
    assert [f.city for f in items] == ["A", "B"]  # nosec B101


@pytest.mark.parametrize("reply", ["", "   ", None, "no json here", '{"city": "X"}'])
def test_convert_failures_raise_structured_output_error(reply):
    with pytest.raises(StructuredOutputError):
        StructuredOutputConverter(Forecast).convert(reply)


def test_extract_json_text_skips_invalid_candidates():
    assert extract_json_text("{broken [1, 2] tail") == "[1, 2]"  # nosec B101
