"""Unit tests for the stateless JSON codec."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from crux_llmclient.base.json_codec import DEFAULT_CODEC, JsonCodec
from crux_llmclient.base.models import Message


def test_dumps_is_compact_and_keeps_unicode():
    assert DEFAULT_CODEC.dumps({"a": "é", "b": [1]}) == '{"a":"é","b":[1]}'  # nosec B101


def test_dumps_uses_to_dict_of_value_objects():
    assert DEFAULT_CODEC.dumps([Message.user("x")]) == '[{"role":"user","content":"x"}]'  # nosec B101


def test_ensure_ascii_variant():
    assert JsonCodec(ensure_ascii=True).dumps("é") == '"\\u00e9"'  # nosec B101


def test_loads_propagates_decode_errors():
    with pytest.raises(ValueError):
        DEFAULT_CODEC.loads("{nope")


def test_shared_instance_is_safe_across_threads():
    docs = [{"i": i, "s": "x" * i} for i in range(200)]
    with ThreadPoolExecutor(max_workers=8) as pool:
        round_tripped = list(pool.map(lambda d: DEFAULT_CODEC.loads(DEFAULT_CODEC.dumps(d)), docs))
    assert round_tripped == docs  # nosec B101
